"""Configuration schema definitions using Pydantic for validation.

Using Pydantic ensures configuration errors are caught before any external
command is started, with clear error messages.
"""

from pathlib import PurePath
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class DependableConfig(BaseModel):
    """Top-level configuration for a health-report run.

    Attributes:
        manifest_name: Manifest file name relative to the project root.
        include_dev_dependencies: Whether devDependencies are merged into the
            dependency list.
        package_manager: Executable used for the audit and outdated checks.
        audit_args: Arguments passed to the package manager for the audit.
        outdated_args: Arguments passed to the package manager for the
            outdated check.
        command_timeout: Per-command timeout in seconds (None = no limit).
        concurrent_checks: Whether both checks run at the same time.
    """

    manifest_name: str = "package.json"
    include_dev_dependencies: bool = True
    package_manager: str = "npm"
    audit_args: List[str] = Field(default_factory=lambda: ["audit", "--json"])
    outdated_args: List[str] = Field(default_factory=lambda: ["outdated", "--json"])
    command_timeout: Optional[float] = Field(default=300.0, gt=0)
    concurrent_checks: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("package_manager")
    @classmethod
    def validate_package_manager(cls, v: str) -> str:
        """Validate that the package manager executable is named."""
        v = v.strip()
        if not v or v.startswith("-"):
            raise ValueError(f"Invalid package manager: {v!r}")
        return v

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        """Validate that the manifest stays inside the project root."""
        path = PurePath(v)
        if not v or path.is_absolute() or ".." in path.parts:
            raise ValueError(
                f"manifest_name must be a relative path inside the project: {v!r}"
            )
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependableConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            DependableConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def with_overrides(self, **overrides: Any) -> "DependableConfig":
        """Return a validated copy with non-None overrides applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
