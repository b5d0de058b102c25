"""toolrpc — a tool registry and JSON-RPC 2.0 dispatcher."""

from __future__ import annotations

__version__ = "0.1.0"
