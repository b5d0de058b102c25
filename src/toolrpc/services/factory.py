"""Per-request construction of :class:`GisServiceClient`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from toolrpc.binding.services import Factory, ServiceScope
from toolrpc.services.client import GisServiceClient
from toolrpc.services.errors import ServiceAuthorizationError

_BEARER = "bearer "


def service_key_from_headers(headers: Mapping[str, str]) -> str:
    """Extract the service key from an ``Authorization: Bearer <key>`` header.

    Raises:
        ServiceAuthorizationError: The header is missing, uses another
            scheme, or carries an empty key.
    """
    auth = headers.get("authorization") or headers.get("Authorization")
    if not auth:
        raise ServiceAuthorizationError("Unauthorized: missing Authorization header.")
    if not auth.lower().startswith(_BEARER):
        raise ServiceAuthorizationError(
            "Unauthorized: Authorization header must use Bearer scheme."
        )
    key = auth[len(_BEARER):].strip()
    if not key:
        raise ServiceAuthorizationError("Unauthorized: empty service key.")
    return key


def gis_client_factory(
    base_url: str,
    service_key: str = "",
    *,
    timeout: float = 30.0,
    http_client: httpx.AsyncClient | None = None,
) -> Factory:
    """Build a scoped factory for :class:`GisServiceClient`.

    Scopes opened by the HTTP app carry a ``headers`` item and must present a
    bearer token.  Scopes without headers (CLI, tests) use *service_key*.
    """

    def factory(scope: ServiceScope) -> GisServiceClient:
        headers: Any = scope.items.get("headers")
        key = service_key if headers is None else service_key_from_headers(headers)
        return GisServiceClient(base_url, key, timeout=timeout, http_client=http_client)

    return factory
