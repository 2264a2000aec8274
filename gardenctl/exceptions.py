"""Exception hierarchy for gardenctl.

GardenctlError
├── ConfigError
├── ValidationError
│   └── TargetNotFoundError
├── PersistenceError
├── ResolutionError
└── NameLookupError
    ├── LookupFailed
    └── LookupCancelled
"""
from typing import Optional


class GardenctlError(Exception):
    """Base exception for all gardenctl errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


class ConfigError(GardenctlError):
    """Raised when the configuration file cannot be parsed."""


class ValidationError(GardenctlError):
    """Raised when a name does not exist or a target violates the hierarchy."""


class TargetNotFoundError(ValidationError):
    """Raised when a garden, project, seed or shoot name is unknown."""

    def __init__(self, kind: str, name: str, hint: Optional[str] = None):
        super().__init__(f"{kind} '{name}' not found", hint=hint)
        self.kind = kind
        self.name = name


class PersistenceError(GardenctlError):
    """Raised when the target file cannot be read or written."""


class ResolutionError(GardenctlError):
    """Raised when flags and persisted state do not form a valid target."""


class NameLookupError(GardenctlError):
    """Base class for errors of the name lookup service."""


class LookupFailed(NameLookupError):
    """Raised on access or network errors while listing names."""


class LookupCancelled(NameLookupError):
    """Raised when the lookup context was cancelled before a call completed."""
