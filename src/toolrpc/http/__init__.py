"""HTTP transport for the JSON-RPC dispatcher."""

from toolrpc.http.app import create_app, health_payload
from toolrpc.http.middleware import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware", "create_app", "health_payload"]
