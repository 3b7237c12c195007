"""Docker credential-helper protocol handling.

The container engine runs ``docker-credential-acr <action>`` and talks to it
over standard input and output:

- ``get``: stdin is the server URL, stdout is a ``Credentials`` JSON object
- ``store``: stdin is a ``Credentials`` JSON object, no output
- ``erase``: stdin is the server URL, no output
- ``list``: no input, stdout is a JSON object of server URL to username
- ``version``: no input, stdout is a version line
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, TextIO

from . import __version__
from .errors import ProtocolError
from .helper import ACRCredentialHelper
from .logging import LogEvent, log_debug

PROGRAM_NAME = "docker-credential-acr"
PACKAGE_NAME = "acr-credential-helper"

ACTIONS = ("store", "get", "erase", "list", "version")


@dataclass
class Credentials:
    """Credentials exchanged with the container engine."""

    server_url: str
    username: str = ""
    secret: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"ServerURL": self.server_url, "Username": self.username, "Secret": self.secret}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        return cls(
            server_url=str(data.get("ServerURL") or ""),
            username=str(data.get("Username") or ""),
            secret=str(data.get("Secret") or ""),
        )


def usage() -> str:
    """Return the usage line printed for missing or extra arguments."""
    return f"Usage: {PROGRAM_NAME} <{'|'.join(ACTIONS)}>"


def _read_input(stdin: TextIO, whole: bool = False) -> str:
    try:
        return stdin.read() if whole else stdin.readline()
    except ValueError as e:
        # UnicodeDecodeError is a ValueError
        raise ProtocolError(f"invalid input: {e}") from e


def _read_server_url(stdin: TextIO) -> str:
    server_url = _read_input(stdin).strip()
    if not server_url:
        raise ProtocolError("no credentials server URL")
    return server_url


def _write_json(stdout: TextIO, data: Any) -> None:
    json.dump(data, stdout)
    stdout.write("\n")


def store(helper: ACRCredentialHelper, stdin: TextIO) -> None:
    payload = _read_input(stdin, whole=True)
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise ProtocolError(f"invalid credentials payload: {e}") from e
    if not isinstance(data, dict):
        raise ProtocolError("invalid credentials payload: expected a JSON object")

    credentials = Credentials.from_dict(data)
    if not credentials.server_url.strip():
        raise ProtocolError("no credentials server URL")
    if not credentials.username.strip():
        raise ProtocolError("no credentials username")

    helper.add(credentials.server_url, credentials.username, credentials.secret)


def get(helper: ACRCredentialHelper, stdin: TextIO, stdout: TextIO) -> None:
    server_url = _read_server_url(stdin)
    pair = helper.get(server_url)
    _write_json(stdout, Credentials(server_url, pair.username, pair.secret).to_dict())


def erase(helper: ACRCredentialHelper, stdin: TextIO) -> None:
    helper.delete(_read_server_url(stdin))


def list_credentials(helper: ACRCredentialHelper, stdout: TextIO) -> None:
    _write_json(stdout, helper.list())


def print_version(stdout: TextIO) -> None:
    stdout.write(f"{PROGRAM_NAME} ({PACKAGE_NAME}) {__version__}\n")


def handle_command(helper: ACRCredentialHelper, action: str, stdin: TextIO, stdout: TextIO) -> None:
    """Run one credential-helper action.

    Args:
        helper: Helper that implements the operations
        action: One of ``store``, ``get``, ``erase``, ``list`` or ``version``
        stdin: Stream the engine writes the request to
        stdout: Stream the response is written to

    Raises:
        ProtocolError: If the action is unknown or its input is malformed
        CredentialHelperError: Any error raised by the helper operation
    """
    log_debug(LogEvent.HELPER_PROTOCOL, "Handling credential helper action", action=action)

    if action == "store":
        store(helper, stdin)
    elif action == "get":
        get(helper, stdin, stdout)
    elif action == "erase":
        erase(helper, stdin)
    elif action == "list":
        list_credentials(helper, stdout)
    elif action == "version":
        print_version(stdout)
    else:
        raise ProtocolError(f"unknown action: {action}")
