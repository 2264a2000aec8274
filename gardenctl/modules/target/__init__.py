"""Target model, flags, providers and manager."""
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.manager import Manager
from gardenctl.modules.target.models import Target, TargetKind, TargetLevel
from gardenctl.modules.target.provider import DynamicTargetProvider, FilesystemTargetProvider, TargetProvider

__all__ = [
    "DynamicTargetProvider",
    "FilesystemTargetProvider",
    "Manager",
    "Target",
    "TargetFlags",
    "TargetKind",
    "TargetLevel",
    "TargetProvider",
]
