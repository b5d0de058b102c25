"""Dutch postal-code lookup tools."""

from __future__ import annotations

from toolrpc.cancellation import CancellationToken
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.models import CoordinateSystem, PostalCodeRecord

group = ProviderGroup(
    "PostalCodeTools",
    "Retrieves information about Dutch postal codes using the GISBlox Postal Codes API.",
)


@group.tool()
async def GetPostalCode4Record(  # noqa: N802
    client: GisServiceClient,
    id: str,  # noqa: A002
    epsg: CoordinateSystem = CoordinateSystem.RD_NEW,
    cancellation: CancellationToken | None = None,
) -> PostalCodeRecord:
    """Returns the postal code (4 digits) record for a given postal code ID."""
    return await client.get_postal_code_record(4, id, epsg)


@group.tool()
async def GetPostalCode6Record(  # noqa: N802
    client: GisServiceClient,
    id: str,  # noqa: A002
    epsg: CoordinateSystem = CoordinateSystem.RD_NEW,
    cancellation: CancellationToken | None = None,
) -> PostalCodeRecord:
    """Returns the postal code (6 digits) record for a given postal code ID."""
    return await client.get_postal_code_record(6, id, epsg)
