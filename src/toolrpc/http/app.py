"""Starlette application exposing the dispatcher over HTTP.

Routes:

- ``POST {config.path}`` — JSON-RPC 2.0 requests and batches;
- ``GET /health`` — liveness payload;
- ``GET /`` — redirect to ``/health``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import httpx
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import Route

from toolrpc.binding.context import RequestContext
from toolrpc.binding.services import ServiceCollection
from toolrpc.bootstrap import create_services
from toolrpc.cancellation import CancellationToken
from toolrpc.config import ServerConfig
from toolrpc.http.middleware import RequestLoggingMiddleware
from toolrpc.rpc.dispatcher import JsonRpcDispatcher

logger = logging.getLogger(__name__)


def health_payload(config: ServerConfig) -> dict[str, Any]:
    now = datetime.now(UTC)
    return {
        "status": "ok",
        "timestamp": now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z",
        "environment": config.environment,
        "mcp": {
            "server": config.server.name,
            "name": "toolrpc",
            "description": config.server.description,
            "version": config.server.version,
        },
    }


def create_app(
    dispatcher: JsonRpcDispatcher,
    *,
    config: ServerConfig | None = None,
    services: ServiceCollection | None = None,
) -> Starlette:
    """Build the ASGI app.

    When *services* is not given, a service collection sharing one
    ``httpx.AsyncClient`` is created and that client is closed on shutdown.
    """
    config = config or ServerConfig()
    http_client: httpx.AsyncClient | None = None
    if services is None:
        http_client = httpx.AsyncClient(timeout=config.service.timeout)
        services = create_services(config, http_client=http_client)

    async def handle_rpc(request: Request) -> Response:
        body = await request.body()
        token = CancellationToken()
        if config.request_timeout:
            token.cancel_after(config.request_timeout)
        scope = services.create_scope({"headers": dict(request.headers)})
        context = RequestContext(cancellation=token, services=scope)
        try:
            result = await dispatcher.dispatch_raw(body, context)
        finally:
            token.close()
            await scope.aclose()
        return JSONResponse(result.payload, status_code=result.status_code)

    async def health(request: Request) -> Response:
        return JSONResponse(health_payload(config))

    async def root(request: Request) -> Response:
        return RedirectResponse("/health")

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        tools = dispatcher.registry.list_descriptors()
        logger.info(
            "Serving %d tools on %s (environment=%s, service=%s)",
            len(tools),
            config.path,
            config.environment,
            config.service.url,
        )
        try:
            yield
        finally:
            if http_client is not None:
                await http_client.aclose()

    return Starlette(
        routes=[
            Route(config.path, handle_rpc, methods=["POST"]),
            Route("/health", health, methods=["GET"]),
            Route("/", root, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"]
            ),
            Middleware(RequestLoggingMiddleware),
        ],
        lifespan=lifespan,
    )
