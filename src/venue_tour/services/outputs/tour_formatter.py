"""Serializers for tour outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Sequence

from ...models.domain import Venue
from ..tsp.models import DistanceMatrix, TourPlan, tour_stops


def tour_plan_to_json(plan: TourPlan) -> dict:
    return {
        "objective": plan.sense,
        "objective_value": plan.objective_value,
        "total_distance_km": plan.tour.length,
        "venue_count": len(plan.venues),
        "order": list(plan.tour.order),
        "status": plan.status,
        "backend": plan.backend,
        "solver_wall_time_ms": plan.solver_wall_time_ms,
        "elapsed_seconds": plan.elapsed_seconds,
        "metadata": plan.metadata,
        "stops": [asdict(stop) for stop in tour_stops(plan)],
    }


def tour_plan_to_csv(plan: TourPlan) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "venue_id",
        "name",
        "latitude",
        "longitude",
        "distance_from_prev_km",
        "cumulative_distance_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in tour_stops(plan):
        writer.writerow(asdict(stop))
    return buffer.getvalue()


def distance_matrix_to_csv(matrix: DistanceMatrix, venues: Sequence[Venue], *, precision: int = 3) -> str:
    """Render the matrix as a table: one row per venue, one column per venue id."""
    names = {venue.venue_id: venue.name for venue in venues}
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["venue_id", "name", *matrix.venue_ids])
    for origin in matrix.venue_ids:
        writer.writerow(
            [
                origin,
                names.get(origin, ""),
                *(round(matrix.distance(origin, destination), precision) for destination in matrix.venue_ids),
            ]
        )
    return buffer.getvalue()
