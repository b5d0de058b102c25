"""GISBlox web-service client used by the bundled providers."""

from toolrpc.services.client import DEFAULT_SERVICE_URL, GisServiceClient
from toolrpc.services.errors import ServiceApiError, ServiceAuthorizationError
from toolrpc.services.factory import gis_client_factory, service_key_from_headers
from toolrpc.services.models import (
    WKT,
    AnalyticsDateRange,
    Coordinate,
    CoordinateSystem,
    CustomerFolder,
    CustomerMap,
    MapKpiRecord,
    PostalCodeArea,
    PostalCodeRecord,
    RDPoint,
    Subscription,
)

__all__ = [
    "DEFAULT_SERVICE_URL",
    "WKT",
    "AnalyticsDateRange",
    "Coordinate",
    "CoordinateSystem",
    "CustomerFolder",
    "CustomerMap",
    "GisServiceClient",
    "MapKpiRecord",
    "PostalCodeArea",
    "PostalCodeRecord",
    "RDPoint",
    "ServiceApiError",
    "ServiceAuthorizationError",
    "Subscription",
    "gis_client_factory",
    "service_key_from_headers",
]
