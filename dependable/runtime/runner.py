"""External command runner for the audit and outdated checks.

Both checks shell out to the package manager in the project directory and
parse the JSON it prints. npm signals "findings present" through a non-zero
exit status, so the status is never treated as a failure on its own: only
unusable stdout is.
"""

import json
import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, List, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from dependable.config.schema import DependableConfig
from dependable.parsers.base import (
    CommandExecutionError,
    CommandOutputParseError,
    CommandTimeoutError,
)
from dependable.parsers.npm.models import AuditReport, OutdatedReport

logger = logging.getLogger("dependable.runtime.runner")

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class CommandRunner:
    """Runs package-manager checks and validates their JSON payloads.

    Each call spawns exactly one process scoped to the project directory.
    Nothing is retried.
    """

    def __init__(self, config: DependableConfig) -> None:
        self.config = config

    def _command(self, args: List[str]) -> List[str]:
        return [self.config.package_manager, *args]

    def run_json(self, args: List[str], project_path: Union[str, Path]) -> Any:
        """Run a package-manager command and decode its stdout as JSON.

        Args:
            args: Arguments after the package-manager executable.
            project_path: Working directory for the process.

        Returns:
            Any: Decoded JSON payload.

        Raises:
            CommandExecutionError: If the process cannot be started.
            CommandTimeoutError: If the process exceeds the configured timeout.
            CommandOutputParseError: If stdout is not valid JSON.
        """
        cmd = self._command(args)
        label = " ".join(cmd)
        timeout = self.config.command_timeout
        logger.debug("Running %s in %s (timeout=%s)", label, project_path, timeout)

        try:
            res = subprocess.run(
                cmd,
                cwd=str(project_path),
                capture_output=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(
                f"{label} timed out after {timeout} seconds", cmd
            ) from e
        except OSError as e:
            raise CommandExecutionError(f"Cannot run {label}: {e}", cmd) from e

        if res.returncode != 0:
            # Non-zero usually means vulnerabilities or outdated packages were found
            logger.debug("%s exited with status %d", label, res.returncode)

        stderr = (res.stderr or b"").decode("utf-8", errors="replace").strip()
        if stderr:
            logger.warning("%s stderr: %s", label, stderr)

        try:
            return json.loads((res.stdout or b"").decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CommandOutputParseError(
                f"Error parsing {label} output: {e}", cmd
            ) from e

    def _validate(
        self, model: Type[PayloadT], payload: Any, args: List[str]
    ) -> PayloadT:
        cmd = self._command(args)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise CommandOutputParseError(
                f"Unexpected {' '.join(cmd)} payload: {e}", cmd
            ) from e

    def run_audit(self, project_path: Union[str, Path]) -> AuditReport:
        """Run the audit check.

        Raises:
            CommandOutputParseError: If the output is not an audit report,
                including npm's ``{"error": {...}}`` failure object.
        """
        args = self.config.audit_args
        payload = self.run_json(args, project_path)

        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            error = payload["error"]
            summary = error.get("summary") or error.get("code") or "unknown error"
            raise CommandOutputParseError(
                f"{' '.join(self._command(args))} reported an error: {summary}",
                self._command(args),
            )

        report = self._validate(AuditReport, payload, args)
        logger.info(
            "Audit finished: %d vulnerabilities, %d advisories",
            report.counts.total,
            len(report.advisories),
        )
        return report

    def run_outdated(self, project_path: Union[str, Path]) -> OutdatedReport:
        """Run the outdated check."""
        args = self.config.outdated_args
        payload = self.run_json(args, project_path)
        report = self._validate(OutdatedReport, payload, args)
        logger.info("Outdated check finished: %d packages", len(report))
        return report

    def run_checks(
        self, project_path: Union[str, Path]
    ) -> Tuple[AuditReport, OutdatedReport]:
        """Run the audit and outdated checks.

        The checks are independent; with ``concurrent_checks`` enabled they
        run on two worker threads. The first failure is re-raised.

        Returns:
            Tuple[AuditReport, OutdatedReport]: Both parsed payloads.
        """
        if not self.config.concurrent_checks:
            return self.run_audit(project_path), self.run_outdated(project_path)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="dependable") as pool:
            audit_future = pool.submit(self.run_audit, project_path)
            outdated_future = pool.submit(self.run_outdated, project_path)
            return audit_future.result(), outdated_future.result()


__all__ = ["CommandRunner"]
