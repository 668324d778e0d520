"""Rich-based console summary for health reports.

Prints the colored quick-glance lines shown ahead of the full report in
console mode:

    NPM Audit Summary: Total: 3, Critical: 0, High: 1, Moderate: 2, Low: 0
    NPM Outdated Summary: Total outdated packages: 4
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from dependable.parsers.npm.models import (
    AuditReport,
    OutdatedReport,
    ReportDocument,
    VulnerabilityCounts,
)

logger = logging.getLogger("dependable.runtime.display")

STYLE_OK = "green"
STYLE_WARN = "yellow"
STYLE_BAD = "red"


def audit_style(counts: VulnerabilityCounts) -> str:
    """Pick the summary color for vulnerability counts."""
    if counts.critical > 0 or counts.high > 0:
        return STYLE_BAD
    if counts.moderate > 0:
        return STYLE_WARN
    return STYLE_OK


def outdated_style(outdated: OutdatedReport) -> str:
    """Pick the summary color for the outdated package count."""
    return STYLE_WARN if len(outdated) > 0 else STYLE_OK


def audit_summary(audit: AuditReport, package_manager: str = "npm") -> Tuple[str, str]:
    """Build the audit summary line and its style."""
    counts = audit.counts
    line = (
        f"{package_manager.upper()} Audit Summary: Total: {counts.total}, "
        f"Critical: {counts.critical}, High: {counts.high}, "
        f"Moderate: {counts.moderate}, Low: {counts.low}"
    )
    return line, audit_style(counts)


def outdated_summary(
    outdated: OutdatedReport, package_manager: str = "npm"
) -> Tuple[str, str]:
    """Build the outdated summary line and its style."""
    line = (
        f"{package_manager.upper()} Outdated Summary: "
        f"Total outdated packages: {len(outdated)}"
    )
    return line, outdated_style(outdated)


def summary_lines(
    document: ReportDocument, package_manager: str = "npm"
) -> List[Tuple[str, str]]:
    return [
        audit_summary(document.audit, package_manager),
        outdated_summary(document.outdated, package_manager),
    ]


def print_summary(
    document: ReportDocument,
    package_manager: str = "npm",
    console: Optional[Console] = None,
) -> None:
    """Print the colored summary lines to stdout (or the given console)."""
    console = console or Console(highlight=False)
    for line, style in summary_lines(document, package_manager):
        console.print(Text(line, style=style), soft_wrap=True)
