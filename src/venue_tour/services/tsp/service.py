"""Tour planning orchestration service."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from typing import Sequence

from ...data.venues_repository import load_venues
from ...models.domain import Venue
from ...persistence.filesystem import FileStorage
from ...schemas.tours import (
    DistanceMatrixRequest,
    DistanceMatrixResponse,
    TourRequest,
    TourResponse,
    TourStopModel,
    VenueModel,
)
from ..export.geojson import build_map_overlays, tour_to_feature_collection
from ..outputs.tour_formatter import distance_matrix_to_csv, tour_plan_to_csv, tour_plan_to_json
from .combinatorics import count_hamiltonian_cycles
from .distance_matrix import haversine_matrix, validate_venues
from .models import ObjectiveSense, TourPlan, tour_stops
from .solver import SolverOptions, solve_tsp

logger = logging.getLogger(__name__)


def plan_tour(
    venues: Sequence[Venue],
    sense: ObjectiveSense = "minimize",
    options: SolverOptions | None = None,
) -> TourPlan:
    """Run the full pipeline: venues -> distance matrix -> MILP -> ordered tour."""

    started = time.perf_counter()
    ordered = validate_venues(venues)
    matrix = haversine_matrix(ordered)
    tour, solution = solve_tsp(matrix, sense, options)

    if abs(tour.length - solution.objective_value) > 1e-6 * max(1.0, abs(solution.objective_value)):
        logger.warning(
            f"Tour length {tour.length:.6f} differs from solver objective {solution.objective_value:.6f}"
        )

    return TourPlan(
        venues=ordered,
        matrix=matrix,
        tour=tour,
        sense=sense,
        objective_value=solution.objective_value,
        status=solution.status,
        backend=solution.backend,
        solver_wall_time_ms=solution.wall_time_ms,
        elapsed_seconds=time.perf_counter() - started,
        metadata=dict(solution.metadata),
    )


def _to_venues(models: Sequence[VenueModel]) -> list[Venue]:
    return [
        Venue(venue_id=model.venue_id, name=model.name, latitude=model.latitude, longitude=model.longitude)
        for model in models
    ]


def _resolve_venues(payload: TourRequest) -> list[Venue]:
    if payload.venues is not None:
        return _to_venues(payload.venues)
    return list(load_venues())


def _solver_options(payload: TourRequest) -> SolverOptions:
    base = SolverOptions()
    if payload.time_limit_seconds is not None:
        base.time_limit_seconds = payload.time_limit_seconds
    return base


def _merge_tags(tags: Sequence[str] | None) -> list[str]:
    merged: list[str] = []
    for tag in tags or []:
        normalized = tag.strip()
        if normalized and normalized not in merged:
            merged.append(normalized)
    return merged


def _persist(plan: TourPlan) -> str:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix="tour")
    plan.metadata["run_id"] = run_dir.name
    storage.write_artifacts(
        run_dir,
        {
            "summary.json": tour_plan_to_json(plan),
            "tour.csv": tour_plan_to_csv(plan),
            "distance_matrix.csv": distance_matrix_to_csv(plan.matrix, plan.venues),
            "tour.geojson": tour_to_feature_collection(plan),
        },
    )
    logger.info(f"Persisted tour outputs to {run_dir}")
    return run_dir.name


def solve_tour_request(payload: TourRequest) -> TourResponse:
    venues = _resolve_venues(payload)
    plan = plan_tour(venues, payload.objective, _solver_options(payload))

    search_space = count_hamiltonian_cycles(len(plan.venues))
    metadata = plan.metadata
    metadata.update(
        {
            "status": plan.status,
            "backend": plan.backend,
            "solver_wall_time_ms": plan.solver_wall_time_ms,
            "elapsed_seconds": plan.elapsed_seconds,
        }
    )
    if payload.run_label:
        metadata["run_label"] = payload.run_label
    if payload.requested_by:
        metadata["author"] = payload.requested_by
    if payload.notes:
        metadata["notes"] = payload.notes
    if payload.tags:
        metadata["tags"] = _merge_tags(payload.tags)

    if payload.persist:
        _persist(plan)

    # summary.json is written without map overlays.
    metadata["map_overlays"] = build_map_overlays(plan)

    return TourResponse(
        objective=plan.sense,
        objective_value=plan.objective_value,
        total_distance_km=plan.tour.length,
        venue_count=len(plan.venues),
        search_space_size=search_space,
        order=list(plan.tour.order),
        stops=[TourStopModel(**asdict(stop)) for stop in tour_stops(plan)],
        metadata=metadata,
    )


def distance_table(payload: DistanceMatrixRequest) -> DistanceMatrixResponse:
    ordered = validate_venues(_to_venues(payload.venues))
    matrix = haversine_matrix(ordered)
    return DistanceMatrixResponse(
        venue_ids=list(matrix.venue_ids),
        names=[venue.name for venue in ordered],
        distances=matrix.as_lists(),
    )
