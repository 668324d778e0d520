"""Configuration schema and validation for dependable."""

from .schema import DependableConfig

__all__ = [
    "DependableConfig",
]
