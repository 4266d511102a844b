"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the minicc command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from minicc.compiler.errors import CompilerError
from minicc.errors import MiniCCError, ToolchainError


class ExitCode(IntEnum):
    """Exit codes for the command-line tool."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Any pipeline stage or external tool failed
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, CompilerError):
        # Already formatted with location and "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, ToolchainError):
        click.echo(f"Toolchain error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, MiniCCError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
