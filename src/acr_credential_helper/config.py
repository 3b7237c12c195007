"""Runtime configuration for the credential helper.

The helper has no configuration file. Everything it needs is read once from
the process environment at the CLI boundary and passed down explicitly.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Environment variable names
ENV_TENANT_ID = "AZURE_TENANT_ID"
ENV_LOG_LEVEL = "ACR_CREDENTIAL_HELPER_LOG_LEVEL"

# Timeout applied separately to token acquisition and token exchange
TOKEN_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class HelperConfig:
    """Configuration for one helper invocation.

    Attributes:
        tenant_id: Tenant override used when the access token has no ``tid`` claim
        timeout: Seconds allowed for each network-bound step
        log_level: Level name for diagnostic logging on standard error, or None to keep
            logging off
    """

    tenant_id: Optional[str] = None
    timeout: float = TOKEN_REQUEST_TIMEOUT
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HelperConfig":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            A new HelperConfig
        """
        if environ is None:
            environ = os.environ

        tenant_id = (environ.get(ENV_TENANT_ID) or "").strip() or None
        log_level = (environ.get(ENV_LOG_LEVEL) or "").strip().upper() or None
        return cls(tenant_id=tenant_id, log_level=log_level)
