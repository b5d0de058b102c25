"""Geometry conversion tools (WKT <-> GeoJSON)."""

from __future__ import annotations

from toolrpc.cancellation import CancellationToken
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.models import WKT

group = ProviderGroup(
    "ConversionTools",
    "Converts GeoJSON into WKT geometry objects, and vice versa, using the GISBlox Conversion API.",
)


@group.tool("conversion_wkt_to_geojson_get")
async def convert_to_geojson(
    client: GisServiceClient,
    wkt: str,
    as_feature_collection: bool,
    cancellation: CancellationToken,
) -> str:
    """Converts a WKT geometry string into a GeoJSON Feature(Collection) string."""
    return await client.wkt_to_geojson(wkt, as_feature_collection)


@group.tool("conversion_geojson_to_wkt_get")
async def convert_to_wkt(
    client: GisServiceClient,
    geojson: str,
    cancellation: CancellationToken,
) -> list[WKT]:
    """Converts a GeoJSON Feature(Collection) string into one or more WKT objects."""
    return await client.geojson_to_wkt(geojson)
