"""GisServiceClient — async client for the GISBlox web services."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from toolrpc.registry.groups import injectable
from toolrpc.services.errors import ServiceApiError, ServiceAuthorizationError
from toolrpc.services.models import (
    WKT,
    AnalyticsDateRange,
    Coordinate,
    CoordinateSystem,
    CustomerFolder,
    CustomerMap,
    MapKpiRecord,
    PostalCodeRecord,
    RDPoint,
    Subscription,
    TrackedMaps,
)

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_URL = "https://services.gisblox.com/v1"


@injectable
class GisServiceClient:
    """Thin wrapper over the GISBlox REST API.

    Tools declare a ``GisServiceClient`` parameter and receive the instance
    built for the current request.

    Usage::

        async with GisServiceClient(url, service_key) as client:
            record = await client.get_postal_code_record(4, "3811")

    Args:
        base_url: Service root, including the API version segment.
        service_key: Bearer token sent with every request.
        timeout: Per-request timeout in seconds.
        http_client: Shared ``httpx.AsyncClient``; when given it is not closed
            by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SERVICE_URL,
        service_key: str = "",
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {service_key}"} if service_key else {}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> GisServiceClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Info
    # ------------------------------------------------------------------

    async def get_subscriptions(self) -> list[Subscription]:
        data = await self._get_json("info/subscriptions")
        return [Subscription.model_validate(item) for item in data]

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    async def wkt_to_geojson(self, wkt: str, as_feature_collection: bool = False) -> str:
        """Convert a WKT string; returns the GeoJSON text as sent by the service."""
        response = await self._request(
            "POST",
            "conversion/togeojson",
            params={"asFeatureCollection": _flag(as_feature_collection)},
            json={"WKT": wkt},
        )
        return response.text

    async def geojson_to_wkt(self, geojson: str) -> list[WKT]:
        response = await self._request(
            "POST",
            "conversion/towkt",
            content=geojson,
            headers={"Content-Type": "application/json"},
        )
        return [WKT.model_validate(item) for item in _decode(response)]

    # ------------------------------------------------------------------
    # Postal codes
    # ------------------------------------------------------------------

    async def get_postal_code_record(
        self,
        digits: int,
        postal_code_id: str,
        epsg: CoordinateSystem = CoordinateSystem.RD_NEW,
    ) -> PostalCodeRecord:
        """Fetch a 4- or 6-digit postal-code record."""
        if digits not in (4, 6):
            msg = f"Postal codes have 4 or 6 digits, not {digits}"
            raise ValueError(msg)
        data = await self._get_json(
            f"postalcodes/pc{digits}/{postal_code_id}",
            params={"epsg": int(epsg)},
        )
        return PostalCodeRecord.model_validate(data)

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    async def to_wgs84(self, rd_point: RDPoint, decimals: int = -1) -> Coordinate:
        response = await self._request(
            "POST",
            "projection/towgs84",
            params={"decimals": decimals},
            json=rd_point.model_dump(by_alias=True),
        )
        return Coordinate.model_validate(_decode(response))

    # ------------------------------------------------------------------
    # Data lake
    # ------------------------------------------------------------------

    async def upload_file_data(self, data: str, filename: str) -> bool:
        """Store *data* under *filename* in the customer's data-lake folder."""
        response = await self._request(
            "POST",
            "datalake/upload",
            params={"fileName": filename},
            content=data,
            headers={"Content-Type": "application/json"},
        )
        if not response.content:
            return True
        return bool(_decode(response))

    async def get_customer_folder(self) -> CustomerFolder:
        return CustomerFolder.model_validate(await self._get_json("datalake/folder"))

    # ------------------------------------------------------------------
    # Map analytics
    # ------------------------------------------------------------------

    async def list_tracked_maps(self) -> list[CustomerMap]:
        data = await self._get_json("mapanalytics/maps")
        return TrackedMaps.model_validate(data).maps

    async def get_maps_kpis(
        self,
        date_range: AnalyticsDateRange = AnalyticsDateRange.ONE_WEEK,
        end_date: date | None = None,
    ) -> MapKpiRecord:
        data = await self._get_json("mapanalytics/kpis", params=_range(date_range, end_date))
        return MapKpiRecord.model_validate(data)

    async def get_map_kpis(
        self,
        map_id: str,
        date_range: AnalyticsDateRange = AnalyticsDateRange.ONE_WEEK,
        end_date: date | None = None,
    ) -> MapKpiRecord:
        data = await self._get_json(
            f"mapanalytics/maps/{map_id}/kpis", params=_range(date_range, end_date)
        )
        return MapKpiRecord.model_validate(data)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return _decode(await self._request("GET", path, params=params))

    async def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.request(
                method, url, headers={**self._headers, **(headers or {})}, **kwargs
            )
        except httpx.HTTPError as exc:
            raise ServiceApiError(f"{method} {path} failed: {exc}") from exc

        status = response.status_code
        if status in (401, 403):
            raise ServiceAuthorizationError(
                f"Unauthorized: {method} {path} returned HTTP {status}", status_code=status
            )
        if response.is_error:
            detail = response.text.strip() or response.reason_phrase
            raise ServiceApiError(
                f"{method} {path} returned HTTP {status}: {detail}", status_code=status
            )
        logger.debug("%s %s => %d", method, path, status)
        return response


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        msg = f"Service returned invalid JSON for {response.request.url.path}"
        raise ServiceApiError(msg, status_code=response.status_code) from exc


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _range(date_range: AnalyticsDateRange, end_date: date | None) -> dict[str, Any]:
    params: dict[str, Any] = {"dateRange": int(date_range)}
    if end_date is not None:
        params["endDate"] = end_date.isoformat()
    return params
