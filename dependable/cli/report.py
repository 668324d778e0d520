"""Report command implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from dependable.config.schema import DependableConfig
from dependable.export.report import FORMAT_CONSOLE, FORMATS, render_report
from dependable.parsers.base import CommandError, ManifestError
from dependable.runtime.config_loader import load_config
from dependable.runtime.display import print_summary
from dependable.runtime.pipeline import build_report
from dependable.runtime.runner import CommandRunner

logger = logging.getLogger("dependable.cli.report")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_THRESHOLD = 2


def resolve_config(args) -> DependableConfig:
    """Load the configuration source and apply command-line overrides.

    Raises:
        ValidationError: If the resulting configuration is invalid.
        ValueError: If the configuration source cannot be decoded.
        OSError: If a configuration file cannot be read.
    """
    config = load_config(getattr(args, "config", None))

    include_dev = False if getattr(args, "prod_only", False) else None
    concurrent = False if getattr(args, "sequential", False) else None
    return config.with_overrides(
        manifest_name=getattr(args, "manifest", None),
        package_manager=getattr(args, "package_manager", None),
        command_timeout=getattr(args, "timeout", None),
        include_dev_dependencies=include_dev,
        concurrent_checks=concurrent,
    )


def report_command(args, runner: Optional[CommandRunner] = None) -> int:
    """Execute the report command.

    Args:
        args: Parsed command-line arguments.
        runner: Optional command runner override.

    Returns:
        int: Exit code (0 success, 1 failure, 2 severity threshold reached).
    """
    fmt = getattr(args, "format", FORMAT_CONSOLE) or FORMAT_CONSOLE
    fail_on = getattr(args, "fail_on", None)

    try:
        project_path = Path(getattr(args, "path", None) or ".").expanduser().resolve()
        config = resolve_config(args)
    except (ValidationError, ValueError, OSError) as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_FAILURE

    if fmt not in FORMATS:
        logger.warning(
            "Unknown format %r (expected one of: %s); rendering markdown",
            fmt,
            ", ".join(FORMATS),
        )

    logger.info("Dependable is running in %s", project_path)

    try:
        document = build_report(project_path, config=config, runner=runner)
    except ManifestError as e:
        logger.error("Error: %s", e)
        logger.error("Could not retrieve project dependencies. Exiting.")
        return EXIT_FAILURE
    except CommandError as e:
        logger.error("Failed to run %s: %s", " ".join(e.command) or "check", e)
        return EXIT_FAILURE

    if fmt == FORMAT_CONSOLE:
        print_summary(document, package_manager=config.package_manager)
        print()

    print(render_report(document, fmt, package_manager=config.package_manager))

    if fail_on:
        found = document.audit.counts.at_or_above(fail_on)
        if found:
            logger.error(
                "%d vulnerabilities at or above severity %r (--fail-on)", found, fail_on
            )
            return EXIT_THRESHOLD

    return EXIT_OK
