"""
Target manager: reads, changes and persists the current target.
"""
import logging
from typing import Optional, Union

from gardenctl.config import GardenctlConfig
from gardenctl.exceptions import PersistenceError, ResolutionError, TargetNotFoundError, ValidationError
from gardenctl.modules.lookup import LookupContext, NameLookup
from gardenctl.modules.target.models import Target, TargetLevel
from gardenctl.modules.target.provider import DynamicTargetProvider, TargetProvider

logger = logging.getLogger("gardenctl.target.manager")

NO_GARDEN_HINT = "Target a garden first: gardenctl target garden <name>"


class Manager:
    """Mediates every read and change of the current target.

    Each change is a read-modify-write against the provider. Nothing is
    cached, so every call sees the latest persisted state.
    """

    def __init__(self, provider: TargetProvider, lookup: NameLookup, config: Optional[GardenctlConfig] = None):
        self.provider = provider
        self.lookup = lookup
        self.config = config or GardenctlConfig()

    def current_target(self) -> Target:
        try:
            return self.provider.read()
        except PersistenceError as e:
            raise ResolutionError(f"Cannot determine current target: {e}", hint=e.hint) from e

    def without_target_flags(self) -> "Manager":
        """Same manager, but reading the persisted target without flag promotion."""
        provider = self.provider
        if isinstance(provider, DynamicTargetProvider):
            provider = provider.file_provider
        return Manager(provider, self.lookup, self.config)

    def target_garden(self, garden_name: str) -> Target:
        """Target a garden, dropping any project, seed or shoot.

        The current target is not read, so this also recovers from a
        corrupt target file.
        """
        garden = self._resolve_garden(garden_name)
        return self._write(Target(garden_name=garden))

    def target_project(self, garden_name: str, project_name: str, ctx: Optional[LookupContext] = None) -> Target:
        ctx = ctx or LookupContext()
        garden = self._garden_context(garden_name)
        base = Target(garden_name=garden)

        if project_name not in self.lookup.project_names(ctx, base):
            raise TargetNotFoundError("project", project_name, hint=f"List projects with: gardenctl target project --garden {garden} <TAB>")

        return self._write(base.with_project_name(project_name))

    def target_seed(self, garden_name: str, seed_name: str, ctx: Optional[LookupContext] = None) -> Target:
        ctx = ctx or LookupContext()
        garden = self._garden_context(garden_name)
        base = Target(garden_name=garden)

        if seed_name not in self.lookup.seed_names(ctx, base):
            raise TargetNotFoundError("seed", seed_name)

        return self._write(base.with_seed_name(seed_name))

    def target_shoot(
        self,
        shoot_name: str,
        garden_name: str = "",
        project_name: str = "",
        seed_name: str = "",
        ctx: Optional[LookupContext] = None,
    ) -> Target:
        """Target a shoot within the given or current garden/project/seed.

        Without a project or seed in context the owning project is looked up.
        """
        ctx = ctx or LookupContext()
        current = self.current_target()

        if garden_name:
            garden = self._resolve_garden(garden_name)
            base = current if garden == current.garden_name else Target(garden_name=garden)
        elif current.garden_name:
            base = current
        else:
            raise ValidationError(f"cannot target shoot '{shoot_name}' without a garden", hint=NO_GARDEN_HINT)

        base = base.with_shoot_name("")
        if project_name:
            base = base.with_project_name(project_name)
        elif seed_name:
            base = base.with_seed_name(seed_name)

        if not base.project_name and not base.seed_name:
            owner = self.lookup.locate_shoot(ctx, base, shoot_name)
            logger.debug(f"Shoot '{shoot_name}' belongs to project '{owner}'")
            base = base.with_project_name(owner)
        elif shoot_name not in self.lookup.shoot_names(ctx, base):
            raise TargetNotFoundError("shoot", shoot_name)

        return self._write(base.with_shoot_name(shoot_name))

    def unset(self, level: Union[str, TargetLevel]) -> Target:
        """Clear one level. Unsetting project or seed also drops the shoot."""
        try:
            level = TargetLevel(level)
        except ValueError:
            choices = ", ".join(item.value for item in TargetLevel)
            raise ValidationError(f"unknown target level '{level}'", hint=f"Choose one of: {choices}") from None

        if level is TargetLevel.GARDEN:
            return self._write(Target())

        current = self.current_target()
        if level is TargetLevel.PROJECT:
            target = current.with_project_name("").with_shoot_name("") if current.project_name else current
        elif level is TargetLevel.SEED:
            target = current.with_seed_name("").with_shoot_name("") if current.seed_name else current
        else:
            target = current.with_shoot_name("")

        if target == current:
            logger.info(f"No {level.value} targeted, nothing to unset")
        return self._write(target)

    def _resolve_garden(self, garden_name: str) -> str:
        garden = self.config.resolve_garden_alias(garden_name)
        names = self.lookup.garden_names()
        if garden not in names:
            hint = f"Configured gardens: {', '.join(names)}" if names else "No gardens configured"
            raise TargetNotFoundError("garden", garden_name, hint=hint)
        return garden

    def _garden_context(self, garden_name: str) -> str:
        if garden_name:
            return self._resolve_garden(garden_name)
        garden = self.current_target().garden_name
        if not garden:
            raise ValidationError("no garden targeted", hint=NO_GARDEN_HINT)
        return garden

    def _write(self, target: Target) -> Target:
        self.provider.write(target)
        logger.info(f"Targeted {target}")
        return target
