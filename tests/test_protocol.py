"""Tests for the credential-helper protocol layer."""

import io
import json

import pytest
from conftest import FakeTokenBroker

from acr_credential_helper import __version__
from acr_credential_helper.errors import NotRegistryDomainError, NotSupportedError, ProtocolError
from acr_credential_helper.helper import ACRCredentialHelper
from acr_credential_helper.protocol import Credentials, handle_command, usage


def run(helper: ACRCredentialHelper, action: str, stdin: str = "") -> str:
    out = io.StringIO()
    handle_command(helper, action, io.StringIO(stdin), out)
    return out.getvalue()


@pytest.fixture
def helper(broker: FakeTokenBroker) -> ACRCredentialHelper:
    return ACRCredentialHelper(broker=broker)


class TestGet:
    def test_writes_credentials_json(self, helper: ACRCredentialHelper) -> None:
        output = run(helper, "get", "myregistry.azurecr.io\n")

        assert json.loads(output) == {
            "ServerURL": "myregistry.azurecr.io",
            "Username": "00000000-0000-0000-0000-000000000000",
            "Secret": "fake-refresh-token-12345",
        }

    def test_server_url_preserved(self, helper: ACRCredentialHelper) -> None:
        """Test the engine gets back the server URL it sent, not the canonical host."""
        output = run(helper, "get", "https://myregistry.azurecr.io")

        assert json.loads(output)["ServerURL"] == "https://myregistry.azurecr.io"

    @pytest.mark.parametrize("stdin", ["", "\n", "   \n"])
    def test_missing_server_url(self, helper: ACRCredentialHelper, stdin: str) -> None:
        with pytest.raises(ProtocolError, match="no credentials server URL"):
            run(helper, "get", stdin)

    def test_helper_error_propagates(self, helper: ACRCredentialHelper) -> None:
        with pytest.raises(NotRegistryDomainError):
            run(helper, "get", "registry-1.docker.io")


class TestStore:
    def test_rejected(self, helper: ACRCredentialHelper) -> None:
        payload = json.dumps({"ServerURL": "myregistry.azurecr.io", "Username": "user", "Secret": "pass"})

        with pytest.raises(NotSupportedError, match="not implemented"):
            run(helper, "store", payload)

    @pytest.mark.parametrize(
        "payload,message",
        [
            ("not json", "invalid credentials payload"),
            ("[]", "expected a JSON object"),
            ('{"Username": "user", "Secret": "pass"}', "no credentials server URL"),
            ('{"ServerURL": "myregistry.azurecr.io", "Secret": "pass"}', "no credentials username"),
        ],
    )
    def test_malformed_payload(self, helper: ACRCredentialHelper, payload: str, message: str) -> None:
        with pytest.raises(ProtocolError, match=message):
            run(helper, "store", payload)


class TestOtherActions:
    def test_erase_rejected(self, helper: ACRCredentialHelper) -> None:
        with pytest.raises(NotSupportedError, match="not implemented"):
            run(helper, "erase", "myregistry.azurecr.io\n")

    def test_erase_missing_server_url(self, helper: ACRCredentialHelper) -> None:
        with pytest.raises(ProtocolError, match="no credentials server URL"):
            run(helper, "erase", "")

    def test_list(self, helper: ACRCredentialHelper) -> None:
        assert json.loads(run(helper, "list")) == {}

    def test_version(self, helper: ACRCredentialHelper) -> None:
        assert run(helper, "version") == f"docker-credential-acr (acr-credential-helper) {__version__}\n"

    def test_unknown_action(self, helper: ACRCredentialHelper) -> None:
        with pytest.raises(ProtocolError, match="unknown action: foobar"):
            run(helper, "foobar")


def test_credentials_round_trip_keys() -> None:
    credentials = Credentials.from_dict({"ServerURL": "a", "Username": "b", "Secret": "c", "Extra": 1})
    assert credentials.to_dict() == {"ServerURL": "a", "Username": "b", "Secret": "c"}


def test_usage() -> None:
    assert usage() == "Usage: docker-credential-acr <store|get|erase|list|version>"


class TestUndecodableInput:
    """Bytes that are not UTF-8 are reported as protocol errors."""

    @pytest.mark.parametrize("action", ["get", "erase", "store"])
    def test_invalid_utf8(self, helper: ACRCredentialHelper, action: str) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"\xffmyregistry.azurecr.io\n"), encoding="utf-8")

        with pytest.raises(ProtocolError, match="invalid input"):
            handle_command(helper, action, stdin, io.StringIO())
