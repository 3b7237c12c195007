"""Docker credential helper for Azure Container Registry.

This package exchanges an Azure AD identity, resolved through the Azure
default credential chain, for an ACR refresh token and serves it to the
container engine through the credential-helper protocol.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("acr-credential-helper")
except ImportError:
    # Require importlib.metadata which is standard in Python 3.8+
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .auth import AzureTokenBroker, TokenBroker
from .config import HelperConfig
from .errors import (
    AuthFailedError,
    CredentialHelperError,
    EmptyInputError,
    ExchangeFailedError,
    InvalidRegistryNameError,
    InvalidURLError,
    MissingTenantIDError,
    NotRegistryDomainError,
    NotSupportedError,
    RegistryValidationError,
)
from .helper import NULL_GUID_USERNAME, ACRCredentialHelper, CredentialPair
from .registry import CanonicalRegistry, is_registry, normalize

# Define public API
__all__ = [
    # Helper
    "ACRCredentialHelper",
    "CredentialPair",
    "NULL_GUID_USERNAME",
    "HelperConfig",
    # Registry validation
    "CanonicalRegistry",
    "normalize",
    "is_registry",
    # Token broker
    "TokenBroker",
    "AzureTokenBroker",
    # Errors
    "CredentialHelperError",
    "RegistryValidationError",
    "EmptyInputError",
    "InvalidURLError",
    "NotRegistryDomainError",
    "InvalidRegistryNameError",
    "AuthFailedError",
    "MissingTenantIDError",
    "ExchangeFailedError",
    "NotSupportedError",
]
