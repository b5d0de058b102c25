"""Argument binding — request context, service scopes, and the binder."""

from toolrpc.binding.binder import ArgumentBinder, match_keys
from toolrpc.binding.context import RequestContext
from toolrpc.binding.services import ServiceCollection, ServiceScope
from toolrpc.cancellation import CancellationToken

__all__ = [
    "ArgumentBinder",
    "CancellationToken",
    "RequestContext",
    "ServiceCollection",
    "ServiceScope",
    "match_keys",
]
