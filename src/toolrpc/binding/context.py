"""Per-request state threaded from the transport down to the tool call."""

from __future__ import annotations

from dataclasses import dataclass, field

from toolrpc.binding.services import ServiceScope
from toolrpc.cancellation import CancellationToken


@dataclass
class RequestContext:
    """Cancellation signal and service scope for one inbound request."""

    cancellation: CancellationToken = field(default_factory=CancellationToken)
    services: ServiceScope = field(default_factory=ServiceScope)
