"""Error taxonomy for directive migration.

Every failure in this package is fatal for the run. Core modules raise one of
these; the CLI boundary (utils/error_handler.py) turns them into an exit code.
"""

from pathlib import Path

from directivemig.utils.exit_codes import ExitCodes


class DirectiveMigrationError(Exception):
    """Base class for all migration failures."""

    exit_code = ExitCodes.FATAL


class ArgumentError(DirectiveMigrationError):
    """A required path argument is missing or does not exist."""

    exit_code = ExitCodes.USAGE_ERROR


class FileAccessError(DirectiveMigrationError):
    """Failure to open, read, or write a file during collection or migration."""

    def __init__(self, path: Path | str, action: str, cause: BaseException | None = None):
        self.path = Path(path)
        self.action = action
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"failed to {action} {self.path}{detail}")


class MalformedDirectiveError(DirectiveMigrationError):
    """A directive string does not have the expected marker-leading shape."""

    def __init__(self, directive: str, reason: str):
        self.directive = directive
        self.reason = reason
        super().__init__(f"malformed directive {directive!r}: {reason}")


class InvariantViolation(DirectiveMigrationError):
    """An assumption about comment layout did not hold for a source line."""


class ConfigConflictError(DirectiveMigrationError):
    """Config generation was requested but a config file already exists."""

    exit_code = ExitCodes.CONFIG_CONFLICT

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"config file already exists at {self.path}")
