"""Payload schemas for npm audit / npm outdated output.

The external commands emit loosely structured JSON. These models pin down
the fields the report relies on and keep everything else as extra data so
the JSON report stays a faithful copy of what the tools returned.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, RootModel

# Ordered from least to most severe
SEVERITY_LEVELS: Tuple[str, ...] = ("info", "low", "moderate", "high", "critical")


class VulnerabilityCounts(BaseModel):
    """Per-severity vulnerability counters from ``metadata.vulnerabilities``."""

    info: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)
    moderate: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    model_config = {"extra": "allow"}

    def at_or_above(self, severity: str) -> int:
        """Count vulnerabilities whose severity is ``severity`` or worse.

        Args:
            severity: One of SEVERITY_LEVELS.

        Returns:
            int: Sum of the matching counters.
        """
        index = SEVERITY_LEVELS.index(severity)
        return sum(getattr(self, level) for level in SEVERITY_LEVELS[index:])


class AuditMetadata(BaseModel):
    """The ``metadata`` block of an audit report."""

    vulnerabilities: VulnerabilityCounts = Field(default_factory=VulnerabilityCounts)

    model_config = {"extra": "allow"}


class Advisory(BaseModel):
    """A single advisory record keyed by its id in ``advisories``."""

    title: str
    severity: str
    module_name: str
    vulnerable_versions: str = ""
    patched_versions: str = ""
    overview: str = ""
    url: str = ""

    model_config = {"extra": "allow"}


class AuditReport(BaseModel):
    """Parsed ``npm audit --json`` output.

    Only ``metadata.vulnerabilities`` and ``advisories`` are interpreted.
    Newer npm releases report findings under ``vulnerabilities`` instead of
    ``advisories``; that section is carried through untouched.
    """

    metadata: AuditMetadata = Field(default_factory=AuditMetadata)
    advisories: Dict[str, Advisory] = Field(default_factory=dict)

    model_config = {"extra": "allow"}

    @property
    def counts(self) -> VulnerabilityCounts:
        return self.metadata.vulnerabilities


class OutdatedEntry(BaseModel):
    """One package row from ``npm outdated --json``.

    ``current`` is omitted by npm when the package is not installed.
    """

    current: Optional[str] = None
    wanted: str
    latest: str
    dependent: Optional[str] = None

    model_config = {"extra": "allow"}


class OutdatedReport(RootModel[Dict[str, Union[OutdatedEntry, List[OutdatedEntry]]]]):
    """Parsed ``npm outdated --json`` output: package name -> entry.

    npm 7+ lists a package installed at several locations (workspaces,
    nested installs) as a list of entries. ``len()`` counts packages.
    """

    root: Dict[str, Union[OutdatedEntry, List[OutdatedEntry]]] = Field(
        default_factory=dict
    )

    def __len__(self) -> int:
        return len(self.root)

    def items(self):
        return self.root.items()

    def entries(self) -> Iterator[Tuple[str, OutdatedEntry]]:
        """Yield (name, entry) pairs, one per installed location."""
        for name, value in self.root.items():
            if isinstance(value, list):
                for entry in value:
                    yield name, entry
            else:
                yield name, value


class ReportDocument(BaseModel):
    """Everything a report is rendered from. Built once per run."""

    dependencies: Dict[str, str] = Field(default_factory=dict)
    audit: AuditReport = Field(default_factory=AuditReport)
    outdated: OutdatedReport = Field(default_factory=OutdatedReport)

    model_config = {"frozen": True}


__all__ = [
    "SEVERITY_LEVELS",
    "VulnerabilityCounts",
    "AuditMetadata",
    "Advisory",
    "AuditReport",
    "OutdatedEntry",
    "OutdatedReport",
    "ReportDocument",
]
