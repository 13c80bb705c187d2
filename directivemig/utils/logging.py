"""Centralized logging configuration using Loguru.

Usage:
    from directivemig.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if DIRECTIVEMIG_LOG_LEVEL=DEBUG

Environment Variables:
    DIRECTIVEMIG_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    DIRECTIVEMIG_LOG_JSON: 0|1 (default: 0, human-readable)
    DIRECTIVEMIG_LOG_FILE: path to log file (optional, always NDJSON)
    DIRECTIVEMIG_RUN_ID: correlation ID stamped on every record
"""

import json
import os
import sys
import uuid

from loguru import logger

# Remove default handler
logger.remove()

_log_level = os.environ.get("DIRECTIVEMIG_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("DIRECTIVEMIG_LOG_JSON", "0") == "1"
_log_file = os.environ.get("DIRECTIVEMIG_LOG_FILE")
_run_id = os.environ.get("DIRECTIVEMIG_RUN_ID") or uuid.uuid4().hex[:12]


def _to_ndjson(record) -> str:
    """Render a loguru record as a single JSON line."""
    entry = {
        "level": record["level"].name,
        "time": record["time"].isoformat(),
        "msg": record["message"],
        "pid": record["process"].id,
        "run_id": record["extra"].get("run_id", _run_id),
    }

    for key, value in record["extra"].items():
        if key != "run_id":
            entry[key] = str(value) if not isinstance(value, (int, float, bool)) else value

    if record["exception"]:
        entry["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(entry)


def ndjson_sink(message):
    """Write records as NDJSON to stdout."""
    # Never call logger.* inside a sink - causes infinite recursion
    sys.stdout.write(_to_ndjson(message.record) + "\n")
    sys.stdout.flush()


# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(
        ndjson_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:
    def _file_sink(message):
        """Append NDJSON records to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_ndjson(message.record) + "\n")

    logger.add(
        _file_sink,
        level="DEBUG",  # File always captures everything
    )


def get_run_id() -> str:
    """Get the correlation ID for this process."""
    return _run_id


__all__ = [
    "logger",
    "get_run_id",
    "ndjson_sink",
]
