"""Tour endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...errors import InfeasibleError, InvalidInputError, TourPlanningError
from ...schemas.tours import (
    DistanceMatrixRequest,
    DistanceMatrixResponse,
    SearchSpaceResponse,
    TourRequest,
    TourResponse,
)
from ...services.reports.manifest import list_runs
from ...services.tsp.combinatorics import count_hamiltonian_cycles
from ...services.tsp.service import distance_table, solve_tour_request

router = APIRouter(prefix="/tours", tags=["tours"])


@router.post("/solve", response_model=TourResponse, status_code=status.HTTP_200_OK)
def solve(payload: TourRequest) -> TourResponse:
    try:
        return solve_tour_request(payload)
    except (InvalidInputError, InfeasibleError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except TourPlanningError as exc:
        logging.error(f"Tour planning failed: {exc}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error solving tour: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to solve tour: {str(exc)}"
        ) from exc


@router.post("/distance-matrix", response_model=DistanceMatrixResponse, status_code=status.HTTP_200_OK)
def distance_matrix(payload: DistanceMatrixRequest) -> DistanceMatrixResponse:
    try:
        return distance_table(payload)
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/search-space", response_model=SearchSpaceResponse, status_code=status.HTTP_200_OK)
def search_space(venues: int = Query(..., ge=1, description="Number of venues in the tour")) -> SearchSpaceResponse:
    """Number of distinct undirected tours a brute-force search would have to compare."""
    try:
        return SearchSpaceResponse(venues=venues, tours=count_hamiltonian_cycles(venues))
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/runs", status_code=status.HTTP_200_OK)
def runs(limit: int | None = Query(default=None, ge=1)) -> dict:
    return {"runs": list_runs(limit=limit)}
