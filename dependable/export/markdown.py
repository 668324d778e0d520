"""Markdown rendering for health reports."""

import logging
from typing import List

from dependable.parsers.npm.models import ReportDocument

logger = logging.getLogger("dependable.export.markdown")

REPORT_TITLE = "# Dependable Health Report"
NO_DEPENDENCIES = "No dependencies found."
NO_VULNERABILITIES = "No security vulnerabilities found."
NO_OUTDATED = "No outdated dependencies found."

# Shown when npm omits "current" because the package is not installed
MISSING_VERSION = "missing"


def _dependencies_section(document: ReportDocument) -> List[str]:
    lines = ["## Project Dependencies"]
    if document.dependencies:
        lines.extend(f"- {name}: {spec}" for name, spec in document.dependencies.items())
    else:
        lines.append(NO_DEPENDENCIES)
    lines.append("")
    return lines


def _vulnerabilities_section(document: ReportDocument, package_manager: str) -> List[str]:
    lines = [f"## Security Vulnerabilities ({package_manager} audit)"]
    advisories = document.audit.advisories
    if not advisories:
        lines.append(NO_VULNERABILITIES)
    for advisory in advisories.values():
        lines.extend(
            [
                f"### {advisory.title} (Severity: {advisory.severity})",
                f"- Package: {advisory.module_name}",
                f"- Vulnerable Versions: {advisory.vulnerable_versions}",
                f"- Patched Versions: {advisory.patched_versions}",
                f"- Overview: {advisory.overview}",
                f"- URL: {advisory.url}",
                "",
            ]
        )
    lines.append("")
    return lines


def _outdated_section(document: ReportDocument, package_manager: str) -> List[str]:
    lines = [f"## Outdated Dependencies ({package_manager} outdated)"]
    if not len(document.outdated):
        lines.append(NO_OUTDATED)
    for name, entry in document.outdated.entries():
        current = entry.current if entry.current is not None else MISSING_VERSION
        lines.append(
            f"- {name}: Current {current}, Wanted {entry.wanted}, Latest {entry.latest}"
        )
    lines.append("")
    return lines


def render_markdown(document: ReportDocument, package_manager: str = "npm") -> str:
    """Render the report as markdown.

    Sections appear in a fixed order (dependencies, vulnerabilities,
    outdated) and list entries in their original order.

    Args:
        document: Report to render.
        package_manager: Name shown in the section titles.

    Returns:
        str: Markdown text ending with a newline.
    """
    lines = [REPORT_TITLE, ""]
    lines.extend(_dependencies_section(document))
    lines.extend(_vulnerabilities_section(document, package_manager))
    lines.extend(_outdated_section(document, package_manager))
    logger.debug("Rendered markdown report with %d lines", len(lines))
    return "\n".join(lines) + "\n"
