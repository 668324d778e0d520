"""JSON export for health reports."""

import json
import logging

from dependable.parsers.npm.models import ReportDocument

logger = logging.getLogger("dependable.export.json")


def render_json(document: ReportDocument) -> str:
    """Serialize the full report document as pretty-printed JSON.

    Args:
        document: Report to serialize.

    Returns:
        str: JSON text; ``ReportDocument.model_validate_json`` reads it back.
    """
    data = document.model_dump(mode="json")
    logger.debug(
        "Exporting report to JSON: %d dependencies, %d advisories, %d outdated",
        len(document.dependencies),
        len(document.audit.advisories),
        len(document.outdated),
    )
    return json.dumps(data, indent=2, ensure_ascii=False)
