"""Helper functions for CLI operations."""

import sys
from typing import Union

import click

from ...config import HelperConfig
from ...logging import configure_logging


class ExitCode:
    """Exit codes defined by the credential-helper protocol."""

    GENERIC_ERROR = 1


def handle_error(error: Union[Exception, str], exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Report an error the way the credential-helper protocol expects.

    The container engine reads failures from standard output, not standard
    error.

    Args:
        error: Exception or message to report
        exit_code: Exit code to use
    """
    click.echo(str(error))
    sys.exit(exit_code)


def configure_cli_logging(config: HelperConfig, debug: bool = False) -> None:
    """Enable diagnostic logging if it was requested.

    Args:
        config: Helper configuration, carrying the level from the environment
        debug: True when ``--debug`` was passed
    """
    if debug:
        configure_logging("DEBUG")
    elif config.log_level:
        configure_logging(config.log_level)
