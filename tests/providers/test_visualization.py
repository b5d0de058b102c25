"""Tests for the visualization tools."""

from __future__ import annotations

import json
import re
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import unquote

import pytest

from toolrpc.cancellation import CancellationToken
from toolrpc.errors import InvalidParamsError, RequestCancelledError
from toolrpc.providers.visualization import (
    GEOJSON_IO_URL_PREFIX,
    AskZipChatCopilot,
    VisualizePostalCode4,
    geojson_io_url,
)
from toolrpc.services.client import GisServiceClient
from toolrpc.services.errors import ServiceApiError
from toolrpc.services.models import CoordinateSystem, CustomerFolder, PostalCodeRecord


def _mock_client(
    *,
    record: dict[str, object] | None = None,
    uploaded: bool = True,
    folder_id: str = "folder-9",
) -> MagicMock:
    client = MagicMock(spec=GisServiceClient)
    client.base_url = "https://gis.test/v1"
    client.get_postal_code_record = AsyncMock(
        return_value=PostalCodeRecord.model_validate(
            record
            if record is not None
            else {"postalCode": [{"id": "3811", "location": {"geometry": {"WKT": "POLYGON ((0 0))"}}}]}
        )
    )
    client.wkt_to_geojson = AsyncMock(return_value='{"type":"Feature","properties":{}}')
    client.upload_file_data = AsyncMock(return_value=uploaded)
    client.get_customer_folder = AsyncMock(return_value=CustomerFolder(folder_id=folder_id))
    return client


class TestAskZipChatCopilot:
    def test_url(self) -> None:
        assert AskZipChatCopilot("3811") == "https://zipchat.gisblox.com/?pc=3811&c=1&n=0"

    def test_neighbours(self) -> None:
        assert AskZipChatCopilot("3811AB", True).endswith("pc=3811AB&c=1&n=1")


class TestVisualizePostalCode4:
    async def test_builds_geojson_io_url(self) -> None:
        client = _mock_client()
        url = await VisualizePostalCode4(client, "3811", CancellationToken())

        client.get_postal_code_record.assert_awaited_once_with(4, "3811", CoordinateSystem.WGS84)
        client.wkt_to_geojson.assert_awaited_once_with(
            "POLYGON ((0 0))", as_feature_collection=False
        )

        data, filename = client.upload_file_data.await_args.args
        assert re.fullmatch(r"viz_PC4_3811_\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}\.json", filename)
        collection = json.loads(data)
        assert collection["features"][0]["properties"] == {"postcode": "3811"}

        assert url.startswith(GEOJSON_IO_URL_PREFIX)
        data_url = unquote(url[len(GEOJSON_IO_URL_PREFIX):])
        assert data_url == f"https://gis.test/v1/datalake/load/{filename}?folderId=folder-9"

    async def test_blank_id(self) -> None:
        with pytest.raises(InvalidParamsError):
            await VisualizePostalCode4(_mock_client(), "  ", CancellationToken())

    async def test_no_geometry(self) -> None:
        client = _mock_client(record={"postalCode": []})
        with pytest.raises(ValueError, match="No 4-digit postal code geometry"):
            await VisualizePostalCode4(client, "0000", CancellationToken())

    async def test_upload_rejected(self) -> None:
        with pytest.raises(ServiceApiError, match="Failed to upload"):
            await VisualizePostalCode4(_mock_client(uploaded=False), "3811", CancellationToken())

    async def test_missing_folder(self) -> None:
        with pytest.raises(ServiceApiError, match="customer folder"):
            await VisualizePostalCode4(_mock_client(folder_id=""), "3811", CancellationToken())

    async def test_cancelled_before_upload(self) -> None:
        client = _mock_client()
        token = CancellationToken()
        token.cancel()
        with pytest.raises(RequestCancelledError):
            await VisualizePostalCode4(client, "3811", token)
        client.upload_file_data.assert_not_awaited()


def test_geojson_io_url_encodes_everything() -> None:
    url = geojson_io_url("https://a.b/c?d=e&f=g")
    assert url == GEOJSON_IO_URL_PREFIX + "https%3A%2F%2Fa.b%2Fc%3Fd%3De%26f%3Dg"
