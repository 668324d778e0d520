"""Report pipeline: manifest -> checks -> ReportDocument."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from dependable.config.schema import DependableConfig
from dependable.parsers.npm.manifest import load_manifest, merge_dependencies
from dependable.parsers.npm.models import ReportDocument
from dependable.runtime.runner import CommandRunner

logger = logging.getLogger("dependable.runtime.pipeline")


def build_report(
    project_path: Union[str, Path],
    config: Optional[DependableConfig] = None,
    runner: Optional[CommandRunner] = None,
) -> ReportDocument:
    """Collect everything a health report needs for one project.

    The manifest is read first; the external checks only run when it is
    usable.

    Args:
        project_path: Project root directory.
        config: Run configuration (defaults apply when omitted).
        runner: Command runner (built from ``config`` when omitted).

    Returns:
        ReportDocument: The merged report data.

    Raises:
        ManifestError: If the manifest is missing or malformed.
        CommandError: If either check fails.
    """
    config = config or DependableConfig()
    runner = runner or CommandRunner(config)
    project_path = Path(project_path)

    manifest = load_manifest(project_path, config.manifest_name)
    dependencies = merge_dependencies(
        manifest, include_dev=config.include_dev_dependencies
    )
    logger.info("Project dependencies: %d", len(dependencies))

    audit, outdated = runner.run_checks(project_path)

    return ReportDocument(dependencies=dependencies, audit=audit, outdated=outdated)


__all__ = ["build_report"]
