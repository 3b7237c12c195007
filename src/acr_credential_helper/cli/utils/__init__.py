"""CLI utilities package."""

from .helpers import ExitCode, configure_cli_logging, handle_error

__all__ = [
    "ExitCode",
    "configure_cli_logging",
    "handle_error",
]
