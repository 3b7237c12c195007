"""Main CLI application for docker-credential-acr."""

import sys
from typing import Tuple

import click
import rich_click as rich_click

from ..config import HelperConfig
from ..errors import CredentialHelperError
from ..helper import ACRCredentialHelper
from ..protocol import PROGRAM_NAME, handle_command, usage
from .utils import ExitCode, configure_cli_logging, handle_error

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.SHOW_ARGUMENTS = True

# Exposed at module scope so tests can patch it
HelperFactory = ACRCredentialHelper


@click.command(
    name=PROGRAM_NAME,
    cls=rich_click.RichCommand,
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--debug", is_flag=True, help="Write debug logs to standard error.")
def app(args: Tuple[str, ...], debug: bool = False) -> None:
    """Docker credential helper for Azure Container Registry.

    Exchanges your Azure identity for an ACR refresh token. Configure it in
    ~/.docker/config.json:

      {"credHelpers": {"myregistry.azurecr.io": "acr"}}

    Actions: get, store, erase, list, version. Only get returns credentials;
    store and erase always fail.

    Environment:
      AZURE_TENANT_ID                  tenant used when the token carries none
      ACR_CREDENTIAL_HELPER_LOG_LEVEL  log level for diagnostics on stderr
    """
    if len(args) != 1:
        handle_error(usage(), ExitCode.GENERIC_ERROR)

    config = HelperConfig.from_env()
    configure_cli_logging(config, debug)

    helper = HelperFactory(config=config)
    try:
        handle_command(helper, args[0], sys.stdin, sys.stdout)
    except CredentialHelperError as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
