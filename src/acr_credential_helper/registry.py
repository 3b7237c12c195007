"""Registry reference validation for Azure Container Registry.

This module turns the server URL handed over by the container engine into a
canonical ACR host. Both bare hosts (``myregistry.azurecr.io``) and URLs
(``https://myregistry.azurecr.io/``) are accepted; anything carrying a port,
path, query, fragment or user info is rejected so the later token exchange
can only ever be sent to ``https://<name>.azurecr.io``.

Typical usage:

    from acr_credential_helper.registry import normalize

    registry = normalize("HTTPS://MyRegistry.azurecr.io/")
    registry.host  # "myregistry.azurecr.io"
    registry.name  # "myregistry"
"""

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

from .errors import (
    EmptyInputError,
    InvalidRegistryNameError,
    InvalidURLError,
    NotRegistryDomainError,
    RegistryValidationError,
)
from .logging import LogEvent, log_debug

# Standard ACR domain suffix
ACR_DOMAIN_SUFFIX = ".azurecr.io"

# Registry names are lower-case alphanumeric, 5-50 characters. Input is
# lower-cased before matching, so mixed-case references are canonicalized.
REGISTRY_NAME_PATTERN = re.compile(r"^[a-z0-9]{5,50}$")

SCHEME_SEPARATOR = "://"


@dataclass(frozen=True)
class CanonicalRegistry:
    """A validated ACR registry.

    Attributes:
        host: Lower-cased host, always ending with ``.azurecr.io``
        name: Short registry name (``host`` without the domain suffix)
    """

    host: str
    name: str

    def __str__(self) -> str:
        return self.host


def _host_from_url(raw: str) -> str:
    try:
        parsed: SplitResult = urlsplit(raw)
        hostname = parsed.hostname
        port = parsed.port
    except ValueError as e:
        if "port" in str(e).lower():
            raise InvalidURLError("ports are not allowed", raw) from e
        raise InvalidURLError(str(e), raw) from e

    if not parsed.netloc or not hostname:
        raise InvalidURLError("missing host", raw)

    host_part = parsed.netloc.rpartition("@")[2]
    if port is not None or ":" in host_part.rsplit("]", 1)[-1]:
        raise InvalidURLError("ports are not allowed", raw)

    if parsed.path not in ("", "/"):
        raise InvalidURLError("paths are not allowed", raw)

    if parsed.query or parsed.fragment or "?" in raw or "#" in raw or "@" in parsed.netloc:
        raise InvalidURLError("query, fragment, and user info are not allowed", raw)

    return hostname[:-1] if hostname.endswith(".") else hostname


def _host_from_bare(raw: str) -> str:
    trimmed = raw[:-1] if raw.endswith("/") else raw

    if any(marker in trimmed for marker in "/?#"):
        raise InvalidURLError("paths, query, and fragment are not allowed", raw)
    if ":" in trimmed:
        raise InvalidURLError("ports are not allowed", raw)
    if "@" in trimmed:
        raise InvalidURLError("user info is not allowed", raw)

    return trimmed[:-1] if trimmed.endswith(".") else trimmed


def normalize(server_url: str) -> CanonicalRegistry:
    """Validate a registry reference and return its canonical form.

    Args:
        server_url: Registry reference, a bare host or a URL with a scheme

    Returns:
        The canonical registry host and short name

    Raises:
        EmptyInputError: If the reference is empty after trimming
        InvalidURLError: If the reference has a port, path, query, fragment or user info
        NotRegistryDomainError: If the host is not under ``.azurecr.io``
        InvalidRegistryNameError: If the short name is not 5-50 lower-case alphanumerics
    """
    raw = (server_url or "").strip().lower()
    if not raw:
        raise EmptyInputError(server_url)

    # urlsplit silently drops tab and newline characters
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in raw):
        raise InvalidURLError("invalid control character in URL", server_url)

    if SCHEME_SEPARATOR in raw:
        host = _host_from_url(raw)
    else:
        host = _host_from_bare(raw)

    if not host.endswith(ACR_DOMAIN_SUFFIX):
        raise NotRegistryDomainError(host, ACR_DOMAIN_SUFFIX, server_url)

    name = host[: -len(ACR_DOMAIN_SUFFIX)]
    if not REGISTRY_NAME_PATTERN.fullmatch(name):
        raise InvalidRegistryNameError(name, server_url)

    log_debug(LogEvent.REGISTRY_VALIDATION, "Registry reference accepted", host=host)
    return CanonicalRegistry(host=host, name=name)


def is_registry(server_url: str) -> bool:
    """Return True if ``server_url`` is a valid ACR registry reference."""
    try:
        normalize(server_url)
    except RegistryValidationError:
        return False
    return True
