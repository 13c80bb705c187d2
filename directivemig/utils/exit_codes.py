"""Centralized exit codes for the dmig CLI."""


class ExitCodes:
    """Standard exit codes for dmig commands."""

    SUCCESS = 0

    FATAL = 1

    USAGE_ERROR = 2

    CONFIG_CONFLICT = 3

    @classmethod
    def get_description(cls, code: int) -> str:
        """Get human-readable description for an exit code."""
        descriptions = {
            cls.SUCCESS: "Success - requested command completed",
            cls.FATAL: "Migration aborted - file access failure or malformed directive",
            cls.USAGE_ERROR: "Missing or invalid path argument",
            cls.CONFIG_CONFLICT: "Config file already exists - not overwritten",
        }
        return descriptions.get(code, f"Unknown exit code: {code}")
