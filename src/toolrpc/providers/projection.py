"""Coordinate reprojection tools."""

from __future__ import annotations

from toolrpc.cancellation import CancellationToken
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.models import Coordinate, RDPoint

group = ProviderGroup("ProjectionTools", "Reprojects coordinates using the GISBlox Projection API.")


@group.tool()
async def ToWGS84FromRDPoint(  # noqa: N802
    client: GisServiceClient,
    rd_point: RDPoint,
    decimals: int = -1,
    cancellation: CancellationToken | None = None,
) -> Coordinate:
    """Reprojects an RDPoint (Amersfoort / EPSG:28992) to a Coordinate (WGS84).

    Optionally rounds the result to *decimals* places (-1 disables rounding).
    """
    return await client.to_wgs84(rd_point, decimals)
