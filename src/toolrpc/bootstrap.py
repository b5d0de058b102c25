"""Wiring — builds the registry, dispatcher and service collection from config."""

from __future__ import annotations

import logging

import httpx

from toolrpc.binding.services import ServiceCollection
from toolrpc.config import ServerConfig
from toolrpc.providers import create_registry
from toolrpc.registry.registry import ToolRegistry
from toolrpc.rpc.dispatcher import JsonRpcDispatcher
from toolrpc.services.client import GisServiceClient
from toolrpc.services.factory import gis_client_factory

logger = logging.getLogger(__name__)


def create_services(
    config: ServerConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ServiceCollection:
    """Register the request-scoped GIS client."""
    services = ServiceCollection()
    services.add_scoped(
        GisServiceClient,
        gis_client_factory(
            config.service.url,
            config.service.key,
            timeout=config.service.timeout,
            http_client=http_client,
        ),
    )
    return services


def create_dispatcher(
    config: ServerConfig,
    registry: ToolRegistry | None = None,
) -> JsonRpcDispatcher:
    """Build a dispatcher over *registry* (defaults to the bundled providers)."""
    if registry is None:
        registry = create_registry()
    logger.debug(
        "Creating dispatcher for %s (protocol %s)", config.server.name, config.protocol_version
    )
    return JsonRpcDispatcher(
        registry,
        server_info=config.server,
        protocol_version=config.protocol_version,
    )
