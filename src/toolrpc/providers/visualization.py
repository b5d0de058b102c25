"""Visualization tools — geojson.io and ZipChat links for postal codes."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from urllib.parse import quote

from toolrpc.cancellation import CancellationToken
from toolrpc.errors import InvalidParamsError
from toolrpc.providers.geojson import add_feature_property, feature_collection
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.errors import ServiceApiError
from toolrpc.services.models import CoordinateSystem

logger = logging.getLogger(__name__)

GEOJSON_IO_URL_PREFIX = "https://geojson.io/#data=data:text/x-url,"
ZIPCHAT_URL_PREFIX = "https://zipchat.gisblox.com/?pc="

group = ProviderGroup("VisualizationTools", "Tools to visualize geometries using geojson.io.")


@group.tool()
def AskZipChatCopilot(postal_code_id: str, show_neighbours: bool = False) -> str:  # noqa: N802
    """Generates a ZipChat Copilot URL with details about a postal code (4 or 6 digits)."""
    return f"{ZIPCHAT_URL_PREFIX}{postal_code_id}&c=1&n={'1' if show_neighbours else '0'}"


@group.tool()
async def VisualizePostalCode4(  # noqa: N802
    client: GisServiceClient,
    postal_code_id: str,
    cancellation: CancellationToken,
) -> str:
    """Generates a geojson.io URL to visualize the geometry of a postal code (4 digits)."""
    if not postal_code_id or not postal_code_id.strip():
        raise InvalidParamsError("Postal code id must be provided.", parameter="postal_code_id")

    record = await client.get_postal_code_record(4, postal_code_id, CoordinateSystem.WGS84)
    if not record.postal_code or record.postal_code[0].wkt is None:
        msg = f"No 4-digit postal code geometry found for '{postal_code_id}'."
        raise ValueError(msg)
    area = record.postal_code[0]

    cancellation.raise_if_cancelled()
    feature = await client.wkt_to_geojson(area.wkt, as_feature_collection=False)
    feature = add_feature_property(feature, "postcode", area.id)

    url = await upload_to_data_lake(
        client, feature_collection([feature]), f"PC4_{postal_code_id}", cancellation
    )
    return geojson_io_url(url)


async def upload_to_data_lake(
    client: GisServiceClient,
    geojson: str,
    identifier: str,
    cancellation: CancellationToken,
) -> str:
    """Upload *geojson* and return its public data-lake load URL."""
    cancellation.raise_if_cancelled()
    filename = f"viz_{identifier}_{datetime.now(UTC):%Y-%m-%dT%H-%M-%S}.json"
    if not await client.upload_file_data(geojson, filename):
        raise ServiceApiError(f"Failed to upload '{filename}' to Data Lake.")

    cancellation.raise_if_cancelled()
    folder = await client.get_customer_folder()
    if not folder.folder_id.strip():
        raise ServiceApiError("Could not retrieve customer folder ID from Data Lake.")

    logger.info("Uploaded %s to data lake folder %s", filename, folder.folder_id)
    return f"{client.base_url}/datalake/load/{filename}?folderId={folder.folder_id}"


def geojson_io_url(data_url: str) -> str:
    return GEOJSON_IO_URL_PREFIX + quote(data_url, safe="")
