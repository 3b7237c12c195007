"""Azure AD and ACR token handling.

This module obtains an Azure access token through ``DefaultAzureCredential``,
reads the tenant ID from it, and exchanges it for an ACR refresh token at
``https://<registry>/oauth2/exchange``.

The three steps are exposed separately through the ``TokenBroker`` protocol
and composed by ``ACRCredentialHelper.get``. Nothing is cached: each
invocation authenticates and exchanges again.
"""

import threading
from typing import Any, Callable, Dict, Optional, Protocol, TypeVar, runtime_checkable

import jwt
import requests

from .config import TOKEN_REQUEST_TIMEOUT
from .errors import AuthProviderError, ExchangeError, TenantResolutionError
from .logging import LogEvent, log_debug, log_error, log_info, log_warning

# Azure Container Registry resource scope
ACR_SCOPE = "https://containerregistry.azure.net/.default"

# ACR token exchange endpoint path
TOKEN_EXCHANGE_PATH = "/oauth2/exchange"

T = TypeVar("T")


@runtime_checkable
class TokenBroker(Protocol):
    """Capability used by the helper to turn an Azure identity into ACR credentials."""

    def acquire_access_token(self) -> str:
        """Return a fresh Azure access token scoped to ACR."""
        ...

    def resolve_tenant(self, access_token: str) -> str:
        """Return the tenant ID carried by ``access_token``."""
        ...

    def exchange_token(self, registry_host: str, tenant_id: str, access_token: str) -> str:
        """Exchange ``access_token`` for a refresh token for ``registry_host``."""
        ...


def _call_with_timeout(func: Callable[[], T], timeout: float, name: str) -> T:
    """Run ``func`` on a daemon thread and wait at most ``timeout`` seconds.

    Raises:
        TimeoutError: If ``func`` has not returned in time
    """
    outcome: Dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["result"] = func()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=target, name=name, daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise TimeoutError(f"timed out after {timeout:g} seconds")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["result"]


class AzureTokenBroker:
    """Token broker backed by the Azure identity SDK and the ACR exchange endpoint."""

    def __init__(
        self,
        credential: Optional[Any] = None,
        session: Optional[requests.Session] = None,
        timeout: float = TOKEN_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the broker.

        Args:
            credential: Any object with an azure-core style ``get_token(*scopes)``.
                        If None, a ``DefaultAzureCredential`` is created on first use.
            session: Optional requests session for the exchange call
            timeout: Seconds allowed for acquisition and, separately, for the exchange
        """
        self._credential = credential
        self._session = session
        self.timeout = timeout

    def _get_token(self) -> str:
        credential = self._credential
        if credential is None:
            # Imported lazily; the identity SDK is slow to import
            from azure.identity import DefaultAzureCredential

            default_credential = DefaultAzureCredential(process_timeout=int(self.timeout))
            try:
                return default_credential.get_token(ACR_SCOPE).token
            finally:
                default_credential.close()
        return credential.get_token(ACR_SCOPE).token

    def acquire_access_token(self) -> str:
        """Obtain an Azure access token for the ACR scope.

        The default credential chain tries environment variables, workload
        identity, managed identity, then the Azure CLI login session.

        Returns:
            The bearer token string

        Raises:
            AuthProviderError: If the credential chain fails or times out
        """
        log_debug(LogEvent.TOKEN_ACQUISITION, "Requesting Azure access token", scope=ACR_SCOPE)
        try:
            token = _call_with_timeout(self._get_token, self.timeout, "acr-token-acquisition")
        except Exception as e:
            log_error(LogEvent.TOKEN_ACQUISITION, "Azure access token request failed", error=type(e).__name__)
            raise AuthProviderError(e) from e

        if not token:
            raise AuthProviderError("identity provider returned an empty token")

        log_info(LogEvent.TOKEN_ACQUISITION, "Azure access token acquired")
        return token

    def resolve_tenant(self, access_token: str) -> str:
        """Read the ``tid`` claim from an access token.

        The signature is not verified; the token was just issued to us by
        Azure AD and only a claim is read from it.

        Raises:
            TenantResolutionError: If the token cannot be parsed or has no usable ``tid``
        """
        try:
            claims = jwt.decode(access_token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise TenantResolutionError(f"failed to parse JWT: {e}") from e

        if "tid" not in claims:
            raise TenantResolutionError("tid claim not found in token")

        tenant_id = claims["tid"]
        if not isinstance(tenant_id, str):
            raise TenantResolutionError("tid claim is not a string")
        if not tenant_id:
            raise TenantResolutionError("tid claim is empty")

        log_debug(LogEvent.TENANT_RESOLUTION, "Tenant ID read from access token", tenant=tenant_id)
        return tenant_id

    def exchange_token(self, registry_host: str, tenant_id: str, access_token: str) -> str:
        """Exchange an Azure access token for an ACR refresh token.

        Args:
            registry_host: Canonical registry host, e.g. ``myregistry.azurecr.io``
            tenant_id: Azure AD tenant ID
            access_token: Azure access token for the ACR scope

        Returns:
            The ACR refresh token

        Raises:
            ExchangeError: On transport failure, a non-200 status, or a response
                without a refresh token
        """
        url = f"https://{registry_host}{TOKEN_EXCHANGE_PATH}"
        form = {
            "grant_type": "access_token",
            "service": registry_host,
            "tenant": tenant_id,
            "access_token": access_token,
        }
        post = self._session.post if self._session is not None else requests.post

        log_debug(LogEvent.TOKEN_EXCHANGE, "Exchanging access token", url=url)

        def send() -> requests.Response:
            return post(
                url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )

        # requests bounds each connect and read; the deadline bounds the whole request
        try:
            response = _call_with_timeout(send, self.timeout, "acr-token-exchange")
        except (requests.RequestException, TimeoutError) as e:
            log_warning(LogEvent.TOKEN_EXCHANGE, "Token exchange request failed", url=url, error=type(e).__name__)
            raise ExchangeError(f"token exchange request failed: {e}") from e

        if response.status_code != 200:
            body = response.text
            raise ExchangeError(
                f"exchange endpoint returned status {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ExchangeError(f"failed to parse ACR token response: {e}", status_code=200) from e

        refresh_token = payload.get("refresh_token") if isinstance(payload, dict) else None
        if not isinstance(refresh_token, str) or not refresh_token:
            raise ExchangeError("ACR token exchange returned empty refresh_token", status_code=200)

        log_info(LogEvent.TOKEN_EXCHANGE, "ACR refresh token obtained", registry=registry_host)
        return refresh_token
