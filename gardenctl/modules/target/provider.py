"""
Target providers: where the current target is read from and written to.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

import yaml
from jsonschema import ValidationError as SchemaValidationError, validate

from gardenctl.exceptions import PersistenceError, ResolutionError, ValidationError
from gardenctl.modules.target.flags import TargetFlags
from gardenctl.modules.target.models import Target
from gardenctl.utils.files import read_yaml_file, write_yaml_file

if TYPE_CHECKING:
    from gardenctl.config import GardenctlConfig

logger = logging.getLogger("gardenctl.target.provider")

TARGET_SCHEMA = {
    "type": "object",
    "properties": {
        "garden": {"type": "string", "minLength": 1},
        "project": {"type": "string", "minLength": 1},
        "seed": {"type": "string", "minLength": 1},
        "shoot": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
    "not": {"required": ["project", "seed"]},
}


class TargetProvider(ABC):
    """Reads and writes the current target."""

    @abstractmethod
    def read(self) -> Target:
        ...

    @abstractmethod
    def write(self, target: Target) -> None:
        ...


class FilesystemTargetProvider(TargetProvider):
    """Keeps the target in a YAML file, e.g. ~/.garden/target.yaml."""

    def __init__(self, target_file: Union[str, Path]):
        self.target_file = Path(target_file)

    def read(self) -> Target:
        """Load the persisted target; a missing file is the empty target."""
        try:
            data = read_yaml_file(self.target_file)
        except FileNotFoundError:
            logger.debug(f"Target file {self.target_file} does not exist, using empty target")
            return Target()
        except yaml.YAMLError as e:
            raise ResolutionError(f"Target file {self.target_file} is not valid YAML: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to read target file {self.target_file}: {e}") from e

        if data is None:
            return Target()

        try:
            validate(instance=data, schema=TARGET_SCHEMA)
            return Target.from_dict(data)
        except (SchemaValidationError, ValidationError) as e:
            message = e.message if isinstance(e, SchemaValidationError) else str(e)
            raise ResolutionError(
                f"Target file {self.target_file} is corrupt: {message}",
                hint=f"Remove {self.target_file} or run: gardenctl target unset garden",
            ) from e

    def write(self, target: Target) -> None:
        try:
            write_yaml_file(self.target_file, target.to_dict())
        except OSError as e:
            raise PersistenceError(f"Failed to write target file {self.target_file}: {e}") from e
        logger.debug(f"Persisted target {target} to {self.target_file}")


class DynamicTargetProvider(TargetProvider):
    """Applies the command line flags on top of the persisted target.

    Writes go straight to the wrapped provider; flags are never persisted.
    """

    def __init__(
        self,
        file_provider: FilesystemTargetProvider,
        target_flags: TargetFlags,
        config: Optional["GardenctlConfig"] = None,
    ):
        self.file_provider = file_provider
        self.target_flags = target_flags
        self.config = config

    def read(self) -> Target:
        persisted = self.file_provider.read()
        target = self.target_flags.resolved(self.config).merge(persisted)
        if target != persisted:
            logger.debug(f"Target flags changed target from {persisted} to {target}")
        return target

    def write(self, target: Target) -> None:
        self.file_provider.write(target)
