"""Output format selection for health reports."""

import logging

from dependable.export.json import render_json
from dependable.export.markdown import render_markdown
from dependable.parsers.npm.models import ReportDocument

logger = logging.getLogger("dependable.export.report")

FORMAT_CONSOLE = "console"
FORMAT_MARKDOWN = "markdown"
FORMAT_JSON = "json"
FORMATS = (FORMAT_CONSOLE, FORMAT_MARKDOWN, FORMAT_JSON)


def render_report(
    document: ReportDocument,
    fmt: str = FORMAT_CONSOLE,
    package_manager: str = "npm",
) -> str:
    """Render a report in the requested format.

    ``json`` gives the full structure; every other value, including
    ``console`` and unknown names, gives the markdown document.
    """
    if fmt == FORMAT_JSON:
        return render_json(document)
    if fmt not in FORMATS:
        logger.debug("Unknown format %r, rendering markdown", fmt)
    return render_markdown(document, package_manager=package_manager)
