"""GIS web-service payloads.

The service speaks camelCase JSON; models accept either spelling and keep
unknown fields so tool results round-trip everything the service returned.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CoordinateSystem(IntEnum):
    """EPSG codes accepted by the postal-code endpoints."""

    RD_NEW = 28992
    WGS84 = 4326


class AnalyticsDateRange(IntEnum):
    """Map-analytics reporting windows, in days."""

    ONE_WEEK = 7
    TWO_WEEKS = 14
    THREE_WEEKS = 21
    ONE_MONTH = 31


class ServiceModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Coordinate(ServiceModel):
    """A WGS84 coordinate."""

    lat: float
    lon: float


class RDPoint(ServiceModel):
    """A point in the Dutch RD New grid (EPSG:28992)."""

    x: float
    y: float


class WKT(ServiceModel):
    """A single WKT geometry."""

    wkt: str = Field(alias="WKT")


class Geometry(ServiceModel):
    wkt: str | None = Field(default=None, alias="WKT")


class Location(ServiceModel):
    geometry: Geometry | None = None


class PostalCodeArea(ServiceModel):
    """One postal-code area (4 or 6 digits) with its geometry."""

    id: str
    location: Location | None = None

    @property
    def wkt(self) -> str | None:
        if self.location is None or self.location.geometry is None:
            return None
        return self.location.geometry.wkt


class PostalCodeRecord(ServiceModel):
    """Postal-code lookup result; ``postal_code`` is empty when nothing matched."""

    postal_code: list[PostalCodeArea] = []


class Subscription(ServiceModel):
    name: str = ""


class CustomerFolder(ServiceModel):
    folder_id: str = ""


class CustomerMap(ServiceModel):
    id: str
    name: str = ""


class TrackedMaps(ServiceModel):
    maps: list[CustomerMap] = []


class MapKpiRecord(ServiceModel):
    """Map KPIs; the metric fields are passed through as returned."""
