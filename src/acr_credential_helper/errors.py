"""Error types for the ACR credential helper.

This module defines the error types raised while validating registry
references, talking to Azure AD and the registry token endpoint, and
serving the credential-helper protocol. The string form of every error is
the text the container engine shows to the user.
"""

from typing import Optional


class CredentialHelperError(Exception):
    """Base class for all credential-helper errors.

    This is the parent class for all helper-specific exceptions.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: User-facing error message
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message


class RegistryValidationError(CredentialHelperError):
    """Base class for registry reference validation errors.

    Validation errors are terminal: the input is rejected as-is and the
    message is returned to the caller unchanged.
    """

    def __init__(self, message: str, registry: Optional[str] = None) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            registry: The raw registry reference that was rejected
        """
        super().__init__(message)
        self.registry = registry


class EmptyInputError(RegistryValidationError):
    """Raised when the registry reference is empty or whitespace only."""

    def __init__(self, registry: Optional[str] = None) -> None:
        super().__init__("registry URL is empty", registry)


class InvalidURLError(RegistryValidationError):
    """Raised when a registry reference carries a port, path, query, fragment or user info.

    Examples:
        >>> try:
        ...     normalize("https://myregistry.azurecr.io:443")
        ... except InvalidURLError as e:
        ...     print(e.reason)
        ports are not allowed
    """

    def __init__(self, reason: str, registry: Optional[str] = None) -> None:
        """Initialize invalid URL error.

        Args:
            reason: The specific constraint the reference violated
            registry: The raw registry reference
        """
        super().__init__(f"invalid registry URL: {reason}", registry)
        self.reason = reason


class NotRegistryDomainError(RegistryValidationError):
    """Raised when the host does not belong to the ACR domain."""

    def __init__(self, host: str, suffix: str, registry: Optional[str] = None) -> None:
        super().__init__(
            f"not an ACR registry: URL must end with {suffix}, got: {host}",
            registry,
        )
        self.host = host
        self.suffix = suffix


class InvalidRegistryNameError(RegistryValidationError):
    """Raised when the registry short name fails the ACR naming rule."""

    def __init__(self, name: str, registry: Optional[str] = None) -> None:
        super().__init__(
            f"invalid ACR registry name: must be 5-50 alphanumeric characters, got: {name}",
            registry,
        )
        self.name = name


class AuthProviderError(CredentialHelperError):
    """Raised when the Azure identity chain cannot produce an access token.

    The original exception is kept on ``cause`` (and chained with ``from``)
    so diagnostics can inspect it.
    """

    def __init__(self, cause: object) -> None:
        """Initialize auth provider error.

        Args:
            cause: Underlying failure reported by the identity provider
        """
        super().__init__(f"failed to get Azure access token: {cause}")
        self.cause = cause


class TenantResolutionError(CredentialHelperError):
    """Raised when the ``tid`` claim cannot be read from an access token.

    Callers treat this as non-fatal and fall back to a configured tenant.
    """

    pass


class ExchangeError(CredentialHelperError):
    """Raised when the registry token exchange endpoint call fails.

    Examples:
        >>> try:
        ...     broker.exchange_token(host, tenant, token)
        ... except ExchangeError as e:
        ...     print(e.status_code, e.body)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        """Initialize exchange error.

        Args:
            message: Error message
            status_code: HTTP status returned by the endpoint, if any
            body: Raw response body, if any
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthFailedError(CredentialHelperError):
    """Raised by ``get`` when Azure authentication fails."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(
            f"Azure authentication failed: {cause}. "
            "Ensure you are logged in via Azure CLI, have a managed identity, "
            "use workload identity, or have set appropriate environment variables "
            "(AZURE_CLIENT_ID, AZURE_CLIENT_SECRET, AZURE_TENANT_ID)."
        )
        self.cause = cause


class MissingTenantIDError(CredentialHelperError):
    """Raised when no tenant ID is available from the token or the environment."""

    def __init__(self) -> None:
        super().__init__(
            "Unable to determine tenant ID: not found in access token and "
            "AZURE_TENANT_ID environment variable is not set. "
            "Please set AZURE_TENANT_ID to your Azure tenant ID."
        )


class ExchangeFailedError(CredentialHelperError):
    """Raised by ``get`` when the ACR token exchange fails."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(
            f"ACR token exchange failed: {cause}. "
            "Verify that AZURE_TENANT_ID is correct and that you have "
            "permission to access the registry."
        )
        self.cause = cause


class NotSupportedError(CredentialHelperError):
    """Raised for credential-helper operations this helper does not implement.

    Examples:
        >>> try:
        ...     helper.delete("myregistry.azurecr.io")
        ... except NotSupportedError as e:
        ...     print(e.operation)
        erase
    """

    def __init__(self, operation: str) -> None:
        """Initialize not supported error.

        Args:
            operation: Name of the rejected operation
        """
        super().__init__(
            f"operation '{operation}' is not implemented by docker-credential-acr. "
            "This helper only supports credential retrieval (get)."
        )
        self.operation = operation


class ProtocolError(CredentialHelperError):
    """Raised when credential-helper protocol input is malformed."""

    pass
