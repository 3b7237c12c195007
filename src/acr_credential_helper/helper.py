"""ACR implementation of the docker credential-helper operations.

``ACRCredentialHelper`` supports retrieval only: ``get`` validates the
registry, authenticates against Azure AD, resolves the tenant and exchanges
the access token for an ACR refresh token. ``add`` and ``delete`` always
fail and ``list`` reports no stored credentials.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .auth import AzureTokenBroker, TokenBroker
from .config import HelperConfig
from .errors import (
    AuthFailedError,
    AuthProviderError,
    ExchangeError,
    ExchangeFailedError,
    MissingTenantIDError,
    NotSupportedError,
    TenantResolutionError,
)
from .logging import LogEvent, log_debug, log_info
from .registry import normalize

# Username ACR expects alongside a refresh token
NULL_GUID_USERNAME = "00000000-0000-0000-0000-000000000000"


@dataclass(frozen=True)
class CredentialPair:
    """Username and secret returned to the container engine."""

    username: str
    secret: str

    def __repr__(self) -> str:
        return f"CredentialPair(username={self.username!r}, secret='***')"


class ACRCredentialHelper:
    """Credential helper for Azure Container Registry."""

    def __init__(
        self,
        broker: Optional[TokenBroker] = None,
        config: Optional[HelperConfig] = None,
    ) -> None:
        """Initialize the helper.

        Args:
            broker: Token broker to use. Defaults to an AzureTokenBroker.
            config: Helper configuration. Defaults to ``HelperConfig()`` with no tenant override.
        """
        self.config = config or HelperConfig()
        self.broker = broker or AzureTokenBroker(timeout=self.config.timeout)

    def _resolve_tenant(self, access_token: str) -> str:
        try:
            tenant_id = self.broker.resolve_tenant(access_token)
        except TenantResolutionError as e:
            log_debug(LogEvent.TENANT_RESOLUTION, "Tenant ID not available from token", reason=str(e))
            tenant_id = ""

        if tenant_id:
            return tenant_id

        if self.config.tenant_id:
            log_info(LogEvent.TENANT_RESOLUTION, "Using tenant ID from AZURE_TENANT_ID")
            return self.config.tenant_id

        raise MissingTenantIDError()

    def get(self, server_url: str) -> CredentialPair:
        """Retrieve credentials for a registry.

        Args:
            server_url: Registry reference sent by the container engine

        Returns:
            The null-GUID username and the ACR refresh token

        Raises:
            RegistryValidationError: If ``server_url`` is not a valid ACR registry
            AuthFailedError: If no Azure access token could be obtained
            MissingTenantIDError: If the tenant is neither in the token nor configured
            ExchangeFailedError: If the ACR token exchange fails
        """
        registry = normalize(server_url)

        try:
            access_token = self.broker.acquire_access_token()
        except AuthProviderError as e:
            raise AuthFailedError(e) from e

        tenant_id = self._resolve_tenant(access_token)

        try:
            refresh_token = self.broker.exchange_token(registry.host, tenant_id, access_token)
        except ExchangeError as e:
            raise ExchangeFailedError(e) from e

        log_info(LogEvent.HELPER_PROTOCOL, "Credentials retrieved", registry=registry.host)
        return CredentialPair(username=NULL_GUID_USERNAME, secret=refresh_token)

    def add(self, server_url: str, username: str, secret: str) -> None:
        """Storing credentials is not supported."""
        raise NotSupportedError("store")

    def delete(self, server_url: str) -> None:
        """Erasing credentials is not supported."""
        raise NotSupportedError("erase")

    def list(self) -> Dict[str, str]:
        """Return stored credentials, which is always an empty mapping."""
        return {}
