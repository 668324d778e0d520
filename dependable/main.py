"""Main CLI entry point for dependable.

Reads the project manifest, runs the package manager's audit and outdated
checks and prints a consolidated health report.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from dependable import __version__
from dependable.cli.report import report_command
from dependable.export.report import FORMAT_CONSOLE
from dependable.parsers.npm.models import SEVERITY_LEVELS

logger = logging.getLogger("dependable.cli")


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Log records go to stderr so stdout only carries the report.

    Args:
        verbose: Enable verbose logging.
        log_file: Also write log records to this file (optional).
        console: Rich Console instance for log output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: List[logging.Handler] = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="dependable",
        description="Dependable - Dependency Health Report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory containing the manifest (default: current directory)",
    )
    parser.add_argument(
        "-f",
        "--format",
        default=FORMAT_CONSOLE,
        help=(
            "Output format: console (default, summary lines + markdown), "
            "markdown, or json. Other values render markdown."
        ),
    )
    parser.add_argument(
        "-m",
        "--manifest",
        help="Manifest file name relative to the project (default: package.json)",
    )
    parser.add_argument(
        "--prod-only",
        action="store_true",
        help="Leave devDependencies out of the dependency list",
    )
    parser.add_argument(
        "--package-manager",
        help="Package manager executable used for the checks (default: npm)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-command timeout in seconds (default: 300)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run the audit and outdated checks one after the other",
    )
    parser.add_argument(
        "--fail-on",
        choices=SEVERITY_LEVELS[1:],
        help=(
            "Exit with status 2 when vulnerabilities at or above this severity "
            "are found. Useful for CI validation."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional configuration. Can be a path to a TOML/JSON file "
            "(e.g. dependable.toml) or an inline TOML/JSON string. "
            "When omitted, built-in defaults are used."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, log_file=args.log_file)
    logger.debug("Arguments: %s", vars(args))

    return report_command(args)


if __name__ == "__main__":
    sys.exit(main())
