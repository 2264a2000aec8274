"""
Transient target overrides from the command line.
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from gardenctl.exceptions import ResolutionError, ValidationError
from gardenctl.modules.target.models import Target

if TYPE_CHECKING:
    from gardenctl.config import GardenctlConfig

logger = logging.getLogger("gardenctl.target.flags")


@dataclass
class TargetFlags:
    """The --garden/--project/--seed/--shoot values of one invocation.

    Merging these flags with the persisted target implements "moving up":
    naming a level explicitly re-targets from that level and drops whatever
    was targeted below it.
    """
    garden_name: str = ""
    project_name: str = ""
    seed_name: str = ""
    shoot_name: str = ""

    def is_empty(self) -> bool:
        return not (self.garden_name or self.project_name or self.seed_name or self.shoot_name)

    def resolved(self, config: Optional["GardenctlConfig"]) -> "TargetFlags":
        """Copy of the flags with the garden alias resolved to its name."""
        if config is None or not self.garden_name:
            return TargetFlags(self.garden_name, self.project_name, self.seed_name, self.shoot_name)
        garden_name = config.resolve_garden_alias(self.garden_name)
        if garden_name != self.garden_name:
            logger.debug(f"Resolved garden alias '{self.garden_name}' to '{garden_name}'")
        return TargetFlags(garden_name, self.project_name, self.seed_name, self.shoot_name)

    def merge(self, persisted: Target) -> Target:
        """Combine the flags with the persisted target into the effective target."""
        if self.is_empty():
            return persisted

        target = persisted
        # only a different garden invalidates everything below it
        if self.garden_name and self.garden_name != persisted.garden_name:
            target = Target(garden_name=self.garden_name)

        try:
            if self.project_name:
                target = Target(garden_name=target.garden_name, project_name=self.project_name)
            elif self.seed_name:
                target = Target(garden_name=target.garden_name, seed_name=self.seed_name)

            if self.shoot_name:
                target = target.with_shoot_name(self.shoot_name)
        except ValidationError as e:
            raise ResolutionError(f"Cannot resolve target from flags: {e}", hint=e.hint) from e

        return target

    def display_target(self, current: Target) -> Target:
        """Target used for completion lookups. Never persisted.

        The garden flag replaces the garden but keeps lower levels, so that
        context typed so far is not discarded.
        """
        target = current
        if self.garden_name:
            target = target.with_garden_name(self.garden_name)

        if self.project_name:
            target = target.with_project_name(self.project_name)
        elif self.seed_name:
            target = target.with_seed_name(self.seed_name)
        return target
