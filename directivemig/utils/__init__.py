"""directivemig utilities package.

error_handler is imported directly (it depends on directivemig.errors, which
depends on this package).
"""

from .exit_codes import ExitCodes
from .logging import get_run_id, logger

__all__ = [
    "ExitCodes",
    "get_run_id",
    "logger",
]
