"""GeoJSON string helpers shared by the visualization tools."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def add_feature_property(geojson: str, key: str, value: object) -> str:
    """Set ``properties[key]`` on a GeoJSON object, best effort.

    Input that is not a JSON object is returned unchanged; malformed JSON is
    logged and returned unchanged as well.
    """
    try:
        root = json.loads(geojson)
    except ValueError as exc:
        logger.warning("Failed to parse GeoJSON while adding %r: %s", key, exc)
        return geojson
    if not isinstance(root, dict):
        return geojson

    properties = root.get("properties")
    if not isinstance(properties, dict):
        properties = {}
        root["properties"] = properties
    properties[key] = value
    return json.dumps(root, separators=(",", ":"), ensure_ascii=False)


def feature_collection(features: Iterable[str]) -> str:
    """Join already-serialized features into a FeatureCollection document."""
    return '{"type":"FeatureCollection","features":[' + ",".join(features) + "]}"
