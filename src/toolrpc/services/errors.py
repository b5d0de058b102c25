"""GIS web-service errors, translated into JSON-RPC errors by the dispatcher."""

from __future__ import annotations

from toolrpc.errors import UpstreamServiceError


class ServiceApiError(UpstreamServiceError):
    """The GIS web service failed or returned an unusable response."""


class ServiceAuthorizationError(ServiceApiError):
    """The service key is missing, malformed, or rejected upstream."""

    def __init__(self, message: str, *, status_code: int | None = 401) -> None:
        super().__init__(message, status_code=status_code)
