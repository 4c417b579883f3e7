"""
Unified CLI Error Handling
==========================

Provides consistent error messages and exit codes for the gbs2gb tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from gbs2gb.errors import GBS2GBError, PlayerError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    BUILD_ERROR = 1      # One or more files failed to convert
    INVALID_ARGS = 2     # Invalid arguments, missing player or input files
    INTERNAL_ERROR = 3   # Unexpected internal error


def describe_error(error: Exception) -> str:
    """
    One-line description of a per-file conversion failure.

    Example:
        >>> describe_error(InvalidHeaderError("file does not have a valid GBS header"))
        'file does not have a valid GBS header'
        >>> describe_error(FileNotFoundError(2, "No such file", "x.gbs"))
        'cannot access x.gbs: No such file'
    """
    if isinstance(error, GBS2GBError):
        return str(error)

    if isinstance(error, OSError) and error.filename is not None:
        return f"cannot access {error.filename}: {error.strerror}"

    return str(error)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Exception handler for errors that abort the whole run.

    Per-file conversion errors are reported by the batch loop instead;
    this covers setup failures such as a missing player ROM.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, PlayerError):
        # Nothing can be converted without the player
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, OSError):
        click.echo(f"Error: {describe_error(error)}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
