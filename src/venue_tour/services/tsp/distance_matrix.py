"""Great-circle distance matrix construction."""

from __future__ import annotations

import logging
from typing import Sequence

from ...errors import InvalidInputError
from ...models.domain import Venue
from ..geospatial import haversine_km, is_valid_coordinate
from .models import DistanceMatrix

logger = logging.getLogger(__name__)


def validate_venues(venues: Sequence[Venue]) -> tuple[Venue, ...]:
    """Check the venue collection and return it ordered by id.

    Ids must be exactly 1..n with no duplicates and every coordinate must be a
    valid latitude/longitude in degrees.
    """
    if len(venues) < 2:
        raise InvalidInputError(f"At least 2 venues are required, got {len(venues)}.")

    seen: set[int] = set()
    for venue in venues:
        if not is_valid_coordinate(venue.latitude, venue.longitude):
            raise InvalidInputError(
                f"Venue {venue.venue_id} ({venue.name}) has invalid coordinates "
                f"({venue.latitude}, {venue.longitude})."
            )
        if venue.venue_id in seen:
            raise InvalidInputError(f"Duplicate venue id {venue.venue_id}.")
        seen.add(venue.venue_id)

    expected = set(range(1, len(venues) + 1))
    if seen != expected:
        unexpected = sorted(seen - expected)
        raise InvalidInputError(
            f"Venue ids must form the contiguous range 1..{len(venues)}; unexpected ids: {unexpected}."
        )
    return tuple(sorted(venues, key=lambda venue: venue.venue_id))


def haversine_matrix(ordered: Sequence[Venue]) -> DistanceMatrix:
    """All-pairs haversine matrix in kilometres for venues already checked by
    ``validate_venues``; row k belongs to ``ordered[k]``.
    """
    n = len(ordered)
    rows = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            distance = haversine_km(
                ordered[i].latitude, ordered[i].longitude, ordered[j].latitude, ordered[j].longitude
            )
            rows[i][j] = distance
            rows[j][i] = distance

    logger.info(f"Built {n}x{n} haversine distance matrix")
    return DistanceMatrix.from_rows(rows)


def build_distance_matrix(venues: Sequence[Venue]) -> DistanceMatrix:
    """Validate ``venues`` and compute their symmetric haversine matrix."""
    return haversine_matrix(validate_venues(venues))
