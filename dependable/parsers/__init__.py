"""Manifest and payload parsers for dependable."""

from dependable.parsers.base import (
    CommandError,
    CommandExecutionError,
    CommandOutputParseError,
    CommandTimeoutError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    RecoverableError,
)

__all__ = [
    "RecoverableError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "CommandError",
    "CommandOutputParseError",
    "CommandExecutionError",
    "CommandTimeoutError",
]
