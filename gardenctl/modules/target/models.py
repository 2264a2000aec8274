"""
Data models for the garden/project/seed/shoot target.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List

from gardenctl.exceptions import ValidationError


class TargetKind(str, Enum):
    """Which level of the hierarchy a target points at."""
    EMPTY = "empty"
    GARDEN = "garden"
    PROJECT = "project"
    SEED = "seed"
    SHOOT = "shoot"


class TargetLevel(str, Enum):
    """Levels that can be targeted or unset individually."""
    GARDEN = "garden"
    PROJECT = "project"
    SEED = "seed"
    SHOOT = "shoot"


@dataclass(frozen=True)
class Target:
    """Immutable position in the garden hierarchy.

    Project and seed are mutually exclusive, and a shoot requires a garden.
    Use the ``with_*`` methods to derive new targets; each of them keeps the
    invariants intact by clearing whatever the new value conflicts with.
    """
    garden_name: str = ""
    project_name: str = ""
    seed_name: str = ""
    shoot_name: str = ""

    def __post_init__(self):
        if self.project_name and self.seed_name:
            raise ValidationError(
                f"project '{self.project_name}' and seed '{self.seed_name}' cannot be targeted at the same time"
            )
        if self.shoot_name and not self.garden_name:
            raise ValidationError(
                f"shoot '{self.shoot_name}' cannot be targeted without a garden",
                hint="Target a garden first: gardenctl target garden <name>",
            )

    @property
    def kind(self) -> TargetKind:
        if self.shoot_name:
            return TargetKind.SHOOT
        if self.project_name:
            return TargetKind.PROJECT
        if self.seed_name:
            return TargetKind.SEED
        if self.garden_name:
            return TargetKind.GARDEN
        return TargetKind.EMPTY

    def is_empty(self) -> bool:
        return self.kind is TargetKind.EMPTY

    def with_garden_name(self, name: str) -> "Target":
        # nothing below a garden survives without one
        if not name:
            return Target()
        return replace(self, garden_name=name)

    def with_project_name(self, name: str) -> "Target":
        if not name:
            return replace(self, project_name="")
        return replace(self, project_name=name, seed_name="")

    def with_seed_name(self, name: str) -> "Target":
        if not name:
            return replace(self, seed_name="")
        return replace(self, seed_name=name, project_name="")

    def with_shoot_name(self, name: str) -> "Target":
        return replace(self, shoot_name=name)

    def level_names(self) -> List[str]:
        """Non-empty names from the top of the hierarchy down."""
        return [name for name in (self.garden_name, self.project_name, self.seed_name, self.shoot_name) if name]

    def to_dict(self) -> Dict[str, str]:
        """Serializable form; unset levels are omitted."""
        data = {
            "garden": self.garden_name,
            "project": self.project_name,
            "seed": self.seed_name,
            "shoot": self.shoot_name,
        }
        return {key: value for key, value in data.items() if value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Target":
        return cls(
            garden_name=data.get("garden") or "",
            project_name=data.get("project") or "",
            seed_name=data.get("seed") or "",
            shoot_name=data.get("shoot") or "",
        )

    def __str__(self) -> str:
        if self.is_empty():
            return "<empty target>"
        return "/".join(self.level_names())
