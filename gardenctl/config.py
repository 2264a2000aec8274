"""Configuration management for the gardenctl application.

Settings come from the following sources, highest precedence first:
1. Explicit ``--config`` path
2. Environment variables (``GCTL_*``, optionally from a ``.env`` file)
3. The configuration file found in the garden home directory
4. Default values
"""
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from gardenctl.exceptions import ConfigError

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger("gardenctl.config")

ENV_PREFIX = "GCTL"
ENV_GARDEN_HOME_DIR = f"{ENV_PREFIX}_HOME"
ENV_CONFIG_NAME = f"{ENV_PREFIX}_CONFIG_NAME"

GARDEN_HOME_FOLDER = ".garden"
CONFIG_NAME = "gardenctl-v2"
TARGET_FILENAME = "target.yaml"


def env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to ``default`` if unparsable."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default


class Config:
    """Application configuration with sensible defaults."""

    # Logging
    LOG_LEVEL: str = os.getenv(f"{ENV_PREFIX}_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = os.getenv(
        f"{ENV_PREFIX}_LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Timeouts (in seconds)
    LOOKUP_TIMEOUT: float = env_float(f"{ENV_PREFIX}_LOOKUP_TIMEOUT", 30.0)

    @staticmethod
    def garden_home_dir() -> Path:
        """Prefer an explicit GCTL_HOME, fall back to ~/.garden."""
        home = os.getenv(ENV_GARDEN_HOME_DIR)
        if home:
            return Path(home).expanduser()
        return Path.home() / GARDEN_HOME_FOLDER

    @staticmethod
    def config_name() -> str:
        return os.getenv(ENV_CONFIG_NAME) or CONFIG_NAME

    @classmethod
    def target_file(cls) -> Path:
        return cls.garden_home_dir() / TARGET_FILENAME

    @classmethod
    def config_search_paths(cls) -> List[Path]:
        filename = f"{cls.config_name()}.yaml"
        paths = [cls.garden_home_dir() / filename, Path.home() / GARDEN_HOME_FOLDER / filename]
        # GCTL_HOME may point at ~/.garden already
        unique: List[Path] = []
        for path in paths:
            if path not in unique:
                unique.append(path)
        return unique


class Garden(BaseModel):
    """A garden cluster the operator can target."""
    name: str = Field(..., min_length=1, description="Garden identity")
    kubeconfig: str = Field(..., description="Path to the garden kubeconfig")
    context: Optional[str] = Field(default=None, description="Kubeconfig context to use")
    aliases: List[str] = Field(default_factory=list, description="Alternative names for --garden")

    @field_validator("kubeconfig")
    @classmethod
    def expand_kubeconfig(cls, v: str) -> str:
        """Expand the user home directory in the kubeconfig path."""
        return os.path.expanduser(v)


class GardenctlConfig(BaseModel):
    """Contents of the gardenctl configuration file."""
    gardens: List[Garden] = Field(default_factory=list)
    path: Optional[Path] = Field(default=None, exclude=True)

    model_config = {"extra": "ignore"}

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "GardenctlConfig":
        """Load configuration from the given path or the default locations."""
        if config_path:
            path = Path(config_path).expanduser().absolute()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return cls._load_config_file(path)

        for path in Config.config_search_paths():
            if path.exists():
                return cls._load_config_file(path)

        logger.debug("No config file found, using empty configuration")
        return cls()

    @classmethod
    def _load_config_file(cls, path: Path) -> "GardenctlConfig":
        logger.debug(f"Loading config file {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        try:
            config = cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        config.path = path
        return config

    def garden_names(self) -> List[str]:
        return [garden.name for garden in self.gardens]

    def find_garden(self, name_or_alias: str) -> Optional[Garden]:
        for garden in self.gardens:
            if garden.name == name_or_alias:
                return garden
        for garden in self.gardens:
            if name_or_alias in garden.aliases:
                return garden
        return None

    def resolve_garden_alias(self, name: str) -> str:
        """Map an alias to its garden name; unknown names pass through."""
        garden = self.find_garden(name) if name else None
        return garden.name if garden else name
