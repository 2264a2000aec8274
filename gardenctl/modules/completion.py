"""
Shell completion for garden, project, seed and shoot names.

Completion reads the persisted target without flag promotion: while the
user is still typing ``--garden foo --shoot <TAB>``, the garden flag must
not throw away the project or seed the shoot is looked up in.
"""
import logging
import sys
from enum import IntEnum
from typing import Callable, Dict, List, Optional, TextIO, Tuple, Union

from gardenctl.modules.lookup import LookupContext
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.manager import Manager
from gardenctl.modules.target.models import Target, TargetLevel
from gardenctl.utils import filter_strings_by_prefix

logger = logging.getLogger("gardenctl.completion")


class ShellCompDirective(IntEnum):
    """Hints for the shell on what to do with the returned candidates."""
    DEFAULT = 0
    NO_FILE_COMP = 4


Completer = Callable[[LookupContext, Manager, TargetFlags], List[str]]


def garden_names(ctx: LookupContext, manager: Manager, flags: TargetFlags) -> List[str]:
    return manager.lookup.garden_names()


def project_names(ctx: LookupContext, manager: Manager, flags: TargetFlags) -> List[str]:
    # any --garden flag has precedence over the target file
    return manager.lookup.project_names(ctx, _garden_scope(manager, flags))


def seed_names(ctx: LookupContext, manager: Manager, flags: TargetFlags) -> List[str]:
    return manager.lookup.seed_names(ctx, _garden_scope(manager, flags))


def shoot_names(ctx: LookupContext, manager: Manager, flags: TargetFlags) -> List[str]:
    target = flags.display_target(manager.current_target())
    return manager.lookup.shoot_names(ctx, target)


def _garden_scope(manager: Manager, flags: TargetFlags) -> Target:
    if flags.garden_name:
        return Target(garden_name=flags.garden_name)
    return manager.current_target()


COMPLETERS: Dict[TargetLevel, Completer] = {
    TargetLevel.GARDEN: garden_names,
    TargetLevel.PROJECT: project_names,
    TargetLevel.SEED: seed_names,
    TargetLevel.SHOOT: shoot_names,
}


def complete(
    level: Union[str, TargetLevel],
    ctx: LookupContext,
    manager: Manager,
    flags: TargetFlags,
    to_complete: str,
    err: Optional[TextIO] = None,
) -> Tuple[List[str], ShellCompDirective]:
    """Candidates for ``level`` starting with ``to_complete``.

    Errors are written to ``err`` (stderr by default) and yield no
    candidates; they never propagate into the shell.
    """
    err = err or sys.stderr
    completer = COMPLETERS[TargetLevel(level)]

    try:
        manager = manager.without_target_flags()
        names = completer(ctx, manager, flags.resolved(manager.config))
    except Exception as e:
        logger.debug(f"{TargetLevel(level).value} completion failed", exc_info=True)
        print(f"{e}", file=err)
        return [], ShellCompDirective.NO_FILE_COMP

    return filter_strings_by_prefix(to_complete, names), ShellCompDirective.NO_FILE_COMP
