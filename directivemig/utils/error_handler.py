"""Centralized error handler for dmig commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from directivemig.errors import DirectiveMigrationError
from directivemig.utils.exit_codes import ExitCodes
from directivemig.utils.logging import logger


class CommandAbort(click.ClickException):
    """ClickException that carries the exit code of the underlying failure."""

    def __init__(self, message: str, exit_code: int = ExitCodes.FATAL):
        super().__init__(message)
        self.exit_code = exit_code


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that logs a command failure and exits with its error's code."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DirectiveMigrationError as e:
            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            raise CommandAbort(f"{type(e).__name__}: {e}", exit_code=e.exit_code) from e

    return wrapper
