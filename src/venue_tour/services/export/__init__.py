"""Export services."""

from .geojson import (
    build_map_overlays,
    linestring_to_wkt,
    tour_to_feature_collection,
)

__all__ = [
    "build_map_overlays",
    "linestring_to_wkt",
    "tour_to_feature_collection",
]
