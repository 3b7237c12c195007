"""Tests for error classes."""

from acr_credential_helper.errors import (
    AuthFailedError,
    AuthProviderError,
    CredentialHelperError,
    EmptyInputError,
    ExchangeError,
    ExchangeFailedError,
    InvalidRegistryNameError,
    InvalidURLError,
    MissingTenantIDError,
    NotRegistryDomainError,
    NotSupportedError,
    ProtocolError,
    RegistryValidationError,
    TenantResolutionError,
)


class TestErrorClasses:
    """Tests for all error classes."""

    def test_base_error(self) -> None:
        error = CredentialHelperError("Base error message")
        assert error.message == "Base error message"
        assert str(error) == "Base error message"

    def test_validation_errors(self) -> None:
        for error in (
            EmptyInputError(""),
            InvalidURLError("ports are not allowed", "host:1"),
            NotRegistryDomainError("ghcr.io", ".azurecr.io", "ghcr.io"),
            InvalidRegistryNameError("ab", "ab.azurecr.io"),
        ):
            assert isinstance(error, RegistryValidationError)
            assert isinstance(error, CredentialHelperError)

        assert str(NotRegistryDomainError("ghcr.io", ".azurecr.io")) == (
            "not an ACR registry: URL must end with .azurecr.io, got: ghcr.io"
        )
        assert str(InvalidRegistryNameError("ab")) == (
            "invalid ACR registry name: must be 5-50 alphanumeric characters, got: ab"
        )

    def test_auth_provider_error(self) -> None:
        cause = RuntimeError("no credential providers found")
        error = AuthProviderError(cause)

        assert error.cause is cause
        assert str(error) == "failed to get Azure access token: no credential providers found"

    def test_auth_failed_error(self) -> None:
        cause = AuthProviderError("boom")
        error = AuthFailedError(cause)

        assert error.cause is cause
        assert str(error).startswith("Azure authentication failed: failed to get Azure access token: boom.")
        assert "(AZURE_CLIENT_ID, AZURE_CLIENT_SECRET, AZURE_TENANT_ID)" in str(error)

    def test_missing_tenant_id_error(self) -> None:
        assert str(MissingTenantIDError()) == (
            "Unable to determine tenant ID: not found in access token and "
            "AZURE_TENANT_ID environment variable is not set. "
            "Please set AZURE_TENANT_ID to your Azure tenant ID."
        )

    def test_exchange_errors(self) -> None:
        error = ExchangeError("exchange endpoint returned status 403: forbidden", status_code=403, body="forbidden")
        assert error.status_code == 403
        assert error.body == "forbidden"

        wrapped = ExchangeFailedError(error)
        assert wrapped.cause is error
        assert str(wrapped) == (
            "ACR token exchange failed: exchange endpoint returned status 403: forbidden. "
            "Verify that AZURE_TENANT_ID is correct and that you have permission to access the registry."
        )

    def test_not_supported_error(self) -> None:
        error = NotSupportedError("store")
        assert error.operation == "store"
        assert str(error) == (
            "operation 'store' is not implemented by docker-credential-acr. "
            "This helper only supports credential retrieval (get)."
        )

    def test_other_errors(self) -> None:
        assert isinstance(TenantResolutionError("tid claim is empty"), CredentialHelperError)
        assert str(ProtocolError("unknown action: x")) == "unknown action: x"
