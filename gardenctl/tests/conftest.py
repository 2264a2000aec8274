from typing import List, Optional, Tuple

import pytest

from gardenctl.config import Garden, GardenctlConfig
from gardenctl.exceptions import TargetNotFoundError
from gardenctl.modules.lookup import LookupContext, NameLookup
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.manager import Manager
from gardenctl.modules.target.models import Target
from gardenctl.modules.target.provider import DynamicTargetProvider, FilesystemTargetProvider

PROJECTS = {"g1": ["p1", "p2", "prod-app"], "g2": ["p1", "p3"]}
SEEDS = {"g1": ["aws", "gcp"], "g2": ["eu"]}
# (garden, project, seed, shoot)
SHOOTS: List[Tuple[str, str, str, str]] = [
    ("g1", "p1", "aws", "shoot-a"),
    ("g1", "p1", "gcp", "shoot-b"),
    ("g1", "p2", "gcp", "shoot-c"),
    ("g2", "p1", "eu", "other-a"),
    ("g2", "p3", "eu", "other-b"),
]


class FakeNameLookup(NameLookup):
    """In-memory lookup over the tables above."""

    def __init__(self, gardens: Optional[List[str]] = None):
        self.gardens = gardens if gardens is not None else ["g1", "g2"]
        self.error: Optional[Exception] = None
        self.calls: List[Tuple[str, Target]] = []

    def _record(self, ctx: LookupContext, name: str, target: Target):
        ctx.check()
        self.calls.append((name, target))
        if self.error is not None:
            raise self.error
        if target.garden_name not in self.gardens:
            raise TargetNotFoundError("garden", target.garden_name)

    def garden_names(self) -> List[str]:
        if self.error is not None:
            raise self.error
        return list(self.gardens)

    def project_names(self, ctx, target):
        self._record(ctx, "projects", target)
        return list(PROJECTS.get(target.garden_name, []))

    def seed_names(self, ctx, target):
        self._record(ctx, "seeds", target)
        return list(SEEDS.get(target.garden_name, []))

    def shoot_names(self, ctx, target):
        self._record(ctx, "shoots", target)
        return [
            shoot for garden, project, seed, shoot in SHOOTS
            if garden == target.garden_name
            and (not target.project_name or project == target.project_name)
            and (not target.seed_name or seed == target.seed_name)
        ]

    def locate_shoot(self, ctx, target, shoot_name):
        self._record(ctx, "locate", target)
        for garden, project, _, shoot in SHOOTS:
            if garden == target.garden_name and shoot == shoot_name:
                return project
        raise TargetNotFoundError("shoot", shoot_name)


@pytest.fixture
def gardenctl_config(tmp_path):
    return GardenctlConfig(gardens=[
        Garden(name="g1", kubeconfig=str(tmp_path / "g1.yaml"), aliases=["prod"]),
        Garden(name="g2", kubeconfig=str(tmp_path / "g2.yaml"), aliases=["dev"]),
    ])


@pytest.fixture
def lookup():
    return FakeNameLookup()


@pytest.fixture
def target_file(tmp_path):
    return tmp_path / "garden" / "target.yaml"


@pytest.fixture
def file_provider(target_file):
    return FilesystemTargetProvider(target_file)


@pytest.fixture
def manager(file_provider, lookup, gardenctl_config):
    return Manager(file_provider, lookup, gardenctl_config)


@pytest.fixture
def make_dynamic_manager(file_provider, lookup, gardenctl_config):
    def factory(**flags) -> Manager:
        provider = DynamicTargetProvider(file_provider, TargetFlags(**flags), gardenctl_config)
        return Manager(provider, lookup, gardenctl_config)
    return factory
