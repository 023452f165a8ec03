"""GeoJSON/WKT export utilities for tours."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..geospatial import centroid
from ..tsp.models import TourPlan

ROUTE_COLOR = "#e0003e"
MARKER_COLOR = "#0000c1"


def linestring_to_wkt(coordinates: Sequence[Sequence[float]]) -> str:
    """Convert linestring coordinates to WKT format.

    Args:
        coordinates: List of [lat, lon] pairs

    Returns:
        WKT LINESTRING string
    """
    if not coordinates or len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    # WKT uses lon,lat order (x,y)
    coord_pairs = [f"{lon} {lat}" for lat, lon in coordinates]
    return f"LINESTRING({','.join(coord_pairs)})"


def tour_coordinates(plan: TourPlan) -> List[List[float]]:
    """Closed polyline of [lat, lon] pairs in visiting order."""
    return [list(plan.venue(venue_id).coordinates) for venue_id in plan.tour.closed()]


def build_map_overlays(plan: TourPlan) -> Dict[str, Any]:
    """Markers and the connecting polyline, in [lat, lon] order for web maps."""
    position = {venue_id: index for index, venue_id in enumerate(plan.tour.order, start=1)}
    markers = [
        {
            "venue_id": venue.venue_id,
            "name": venue.name,
            "sequence": position[venue.venue_id],
            "coordinates": [venue.latitude, venue.longitude],
        }
        for venue in plan.venues
    ]
    center = centroid([venue.coordinates for venue in plan.venues])
    return {
        "center": [center[0], center[1]],
        "markers": markers,
        "route": {
            "coordinates": tour_coordinates(plan),
            "color": ROUTE_COLOR,
            "distance_km": plan.tour.length,
        },
    }


def tour_to_feature_collection(plan: TourPlan) -> Dict[str, Any]:
    """Convert a tour plan to a GeoJSON FeatureCollection.

    One Point feature per venue plus a single LineString for the closed tour.
    GeoJSON positions are [lon, lat].
    """
    position = {venue_id: index for index, venue_id in enumerate(plan.tour.order, start=1)}
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [venue.longitude, venue.latitude]},
            "properties": {
                "venue_id": venue.venue_id,
                "name": venue.name,
                "sequence": position[venue.venue_id],
                "marker-color": MARKER_COLOR,
            },
        }
        for venue in plan.venues
    ]
    line = [[lon, lat] for lat, lon in tour_coordinates(plan)]
    features.append(
        {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": line},
            "properties": {
                "name": "tour",
                "objective": plan.sense,
                "distance_km": plan.tour.length,
                "order": list(plan.tour.order),
                "wkt": linestring_to_wkt(tour_coordinates(plan)),
                "stroke": ROUTE_COLOR,
            },
        }
    )
    return {"type": "FeatureCollection", "features": features}
