"""Typer autocompletion callbacks for target names."""
from typing import Callable, List

import typer

from gardenctl.exceptions import GardenctlError
from gardenctl.factory import Factory
from gardenctl.modules.completion import complete
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.models import TargetLevel


def factory_from_params(ctx: typer.Context) -> Factory:
    """Factory for the global options parsed so far.

    During completion the root callback has not run, so ``ctx.obj`` is not
    set yet and the options are read from the root context instead.
    """
    root = ctx.find_root()
    if isinstance(root.obj, Factory):
        return root.obj

    params = root.params
    flags = TargetFlags(
        garden_name=params.get("garden") or "",
        project_name=params.get("project") or "",
        seed_name=params.get("seed") or "",
        shoot_name=params.get("shoot") or "",
    )
    return Factory(config_file=params.get("config"), target_flags=flags)


def name_completer(level: TargetLevel) -> Callable[[typer.Context, str], List[str]]:
    def autocomplete(ctx: typer.Context, incomplete: str) -> List[str]:
        factory = factory_from_params(ctx)
        try:
            # flags only steer the lookup scope; they must not promote the target
            manager = factory.without_target_flags().manager()
        except GardenctlError as e:
            typer.echo(str(e), err=True)
            return []
        names, _ = complete(level, factory.context(), manager, factory.target_flags, incomplete)
        return names

    autocomplete.__name__ = f"complete_{level.value}"
    return autocomplete


complete_garden = name_completer(TargetLevel.GARDEN)
complete_project = name_completer(TargetLevel.PROJECT)
complete_seed = name_completer(TargetLevel.SEED)
complete_shoot = name_completer(TargetLevel.SHOOT)
