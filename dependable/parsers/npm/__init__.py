"""NPM ecosystem package.

This package provides the npm-specific pieces of the health report:
- Reading package.json and merging its dependency sections
- Schemas for ``npm audit --json`` and ``npm outdated --json`` payloads
"""

from dependable.parsers.npm.manifest import (
    DEFAULT_MANIFEST_NAME,
    get_dependencies,
    load_manifest,
    merge_dependencies,
)
from dependable.parsers.npm.models import (
    SEVERITY_LEVELS,
    Advisory,
    AuditMetadata,
    AuditReport,
    OutdatedEntry,
    OutdatedReport,
    ReportDocument,
    VulnerabilityCounts,
)

__all__ = [
    "DEFAULT_MANIFEST_NAME",
    "get_dependencies",
    "load_manifest",
    "merge_dependencies",
    "SEVERITY_LEVELS",
    "Advisory",
    "AuditMetadata",
    "AuditReport",
    "OutdatedEntry",
    "OutdatedReport",
    "ReportDocument",
    "VulnerabilityCounts",
]
