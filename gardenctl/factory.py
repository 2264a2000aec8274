"""Builds managers and lookups from configuration and command line flags."""
import logging
from pathlib import Path
from typing import Optional

from gardenctl.config import Config, GardenctlConfig
from gardenctl.modules.lookup import KubernetesNameLookup, LookupContext, NameLookup
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.manager import Manager
from gardenctl.modules.target.provider import DynamicTargetProvider, FilesystemTargetProvider

logger = logging.getLogger("gardenctl.factory")


class Factory:
    """Per-invocation wiring of config, target file, flags and lookup."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        target_flags: Optional[TargetFlags] = None,
        target_file: Optional[Path] = None,
        lookup: Optional[NameLookup] = None,
        config: Optional[GardenctlConfig] = None,
    ):
        self.config_file = config_file
        self.target_flags = target_flags or TargetFlags()
        self.target_file = target_file or Config.target_file()
        self._lookup = lookup
        self._config = config

    def config(self) -> GardenctlConfig:
        if self._config is None:
            self._config = GardenctlConfig.load(self.config_file)
        return self._config

    def lookup(self) -> NameLookup:
        if self._lookup is None:
            self._lookup = KubernetesNameLookup(self.config())
        return self._lookup

    def context(self) -> LookupContext:
        return LookupContext(timeout=Config.LOOKUP_TIMEOUT)

    def manager(self) -> Manager:
        """Manager honoring the target flags of this invocation."""
        file_provider = FilesystemTargetProvider(self.target_file)
        provider = DynamicTargetProvider(file_provider, self.target_flags, self.config())
        logger.debug(f"Using target file {self.target_file}")
        return Manager(provider, self.lookup(), self.config())


    def without_target_flags(self) -> "Factory":
        """Factory sharing config and lookup, but ignoring the target flags."""
        return Factory(
            config_file=self.config_file,
            target_file=self.target_file,
            lookup=self._lookup,
            config=self._config,
        )
