"""Error hierarchy shared by the manifest reader and the command runner.

All pipeline failures derive from RecoverableError so the CLI can report
them and exit cleanly instead of dumping a traceback.
"""


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class RecoverableError(Exception):
    """Base class for expected, reportable failures.

    These errors end the current run with a diagnostic and a non-zero exit
    status; they are never retried.
    """
    pass


class ManifestError(RecoverableError):
    """Manifest file error - the pipeline stops before any command runs."""

    def __init__(self, message: str, path) -> None:
        super().__init__(message)
        self.path = path


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file does not exist at the resolved path."""
    pass


class ManifestParseError(ManifestError):
    """Raised when the manifest exists but is not a valid JSON object."""
    pass


class CommandError(RecoverableError):
    """External command error - no report is produced.

    Attributes:
        command: The argv that was (or would have been) executed.
    """

    def __init__(self, message: str, command=None) -> None:
        super().__init__(message)
        self.command = list(command or [])


class CommandOutputParseError(CommandError):
    """Raised when a command's stdout is not the expected JSON payload."""
    pass


class CommandExecutionError(CommandError):
    """Raised when a command cannot be started or does not finish."""
    pass


class CommandTimeoutError(CommandExecutionError):
    """Raised when a command exceeds the configured timeout."""
    pass
