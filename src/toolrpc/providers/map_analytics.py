"""Map analytics tools."""

from __future__ import annotations

from datetime import date

from toolrpc.cancellation import CancellationToken
from toolrpc.errors import InvalidParamsError
from toolrpc.registry.groups import ProviderGroup
from toolrpc.services.client import GisServiceClient
from toolrpc.services.models import AnalyticsDateRange, CustomerMap, MapKpiRecord

group = ProviderGroup(
    "MapAnalyticsTools",
    "Provides access to map analytics data using the GISBlox Map Analytics API.",
    category="Spatial Insights",
    tags=("Map Analytics", "Analytics", "KPIs", "Engagement"),
)


def parse_end_date(end_date: str | None) -> date | None:
    """Parse an optional ISO 8601 date (``2024-01-15``)."""
    if not end_date:
        return None
    try:
        return date.fromisoformat(end_date[:10])
    except ValueError as exc:
        raise InvalidParamsError(
            f"Invalid date format: '{end_date}'. Expected ISO 8601 format (e.g., '2024-01-15').",
            parameter="end_date",
        ) from exc


@group.tool("MapList")
async def list_tracked_maps(
    client: GisServiceClient,
    cancellation: CancellationToken,
) -> list[CustomerMap]:
    """Returns a list of maps that are tracked for a customer."""
    return await client.list_tracked_maps()


@group.tool("AllMapsKpisList")
async def get_maps_kpis(
    client: GisServiceClient,
    date_range: AnalyticsDateRange = AnalyticsDateRange.ONE_WEEK,
    end_date: str | None = None,
    cancellation: CancellationToken | None = None,
) -> MapKpiRecord:
    """Gets the KPIs for all maps within a date range of 7, 14, 21 or 31 days."""
    return await client.get_maps_kpis(date_range, parse_end_date(end_date))


@group.tool("MapKpisGet")
async def get_map_kpis(
    client: GisServiceClient,
    map_id: str,
    date_range: AnalyticsDateRange = AnalyticsDateRange.ONE_WEEK,
    end_date: str | None = None,
    cancellation: CancellationToken | None = None,
) -> MapKpiRecord:
    """Gets the KPIs for a specific map within a date range of 7, 14, 21 or 31 days."""
    return await client.get_map_kpis(map_id, date_range, parse_end_date(end_date))
