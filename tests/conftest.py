"""Shared fixtures for credential helper tests."""

from typing import List, Optional, Tuple

import pytest

from acr_credential_helper.errors import AuthProviderError, ExchangeError, TenantResolutionError


class FakeTokenBroker:
    """Token broker returning canned values and recording calls."""

    def __init__(
        self,
        access_token: str = "fake-azure-token",
        access_token_error: Optional[Exception] = None,
        tenant_id: str = "fake-tenant-id",
        tenant_error: Optional[Exception] = None,
        refresh_token: str = "fake-refresh-token-12345",
        exchange_error: Optional[Exception] = None,
    ) -> None:
        self.access_token = access_token
        self.access_token_error = access_token_error
        self.tenant_id = tenant_id
        self.tenant_error = tenant_error
        self.refresh_token = refresh_token
        self.exchange_error = exchange_error
        self.calls: List[str] = []
        self.exchanges: List[Tuple[str, str, str]] = []

    def acquire_access_token(self) -> str:
        self.calls.append("acquire")
        if self.access_token_error is not None:
            raise self.access_token_error
        return self.access_token

    def resolve_tenant(self, access_token: str) -> str:
        self.calls.append("resolve_tenant")
        if self.tenant_error is not None:
            raise self.tenant_error
        return self.tenant_id

    def exchange_token(self, registry_host: str, tenant_id: str, access_token: str) -> str:
        self.calls.append("exchange")
        self.exchanges.append((registry_host, tenant_id, access_token))
        if self.exchange_error is not None:
            raise self.exchange_error
        return self.refresh_token


@pytest.fixture
def broker() -> FakeTokenBroker:
    """A broker for which every step succeeds."""
    return FakeTokenBroker()


@pytest.fixture
def failing_auth_broker() -> FakeTokenBroker:
    return FakeTokenBroker(access_token_error=AuthProviderError("no credential providers found"))


@pytest.fixture
def no_tenant_broker() -> FakeTokenBroker:
    return FakeTokenBroker(tenant_id="", tenant_error=TenantResolutionError("tid claim not found in token"))


@pytest.fixture
def failing_exchange_broker() -> FakeTokenBroker:
    return FakeTokenBroker(
        exchange_error=ExchangeError("exchange endpoint returned status 401: denied", status_code=401, body="denied")
    )
