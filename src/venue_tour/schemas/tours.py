"""Tour request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class VenueModel(BaseModel):
    venue_id: int = Field(..., ge=1, description="Dense 1-based venue identifier.")
    name: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class TourRequest(BaseModel):
    venues: Optional[List[VenueModel]] = Field(
        default=None,
        description="Venues to visit. If omitted, the configured venue file is used.",
    )
    objective: Literal["minimize", "maximize"] = Field(
        default="minimize",
        description="Find the shortest tour, or the longest one.",
    )
    time_limit_seconds: Optional[int] = Field(default=None, ge=1)
    persist: bool = True
    requested_by: Optional[str] = Field(default=None, description="Person or system requesting the run.")
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")
    tags: Optional[List[str]] = Field(default=None, description="Tags to associate with the run.")
    notes: Optional[str] = Field(default=None, description="Free-form notes captured with the run.")


class TourStopModel(BaseModel):
    sequence: int
    venue_id: int
    name: str
    latitude: float
    longitude: float
    distance_from_prev_km: float
    cumulative_distance_km: float


class TourResponse(BaseModel):
    objective: Literal["minimize", "maximize"]
    objective_value: float
    total_distance_km: float
    venue_count: int
    search_space_size: int
    order: List[int]
    stops: List[TourStopModel]
    metadata: dict


class DistanceMatrixRequest(BaseModel):
    venues: List[VenueModel] = Field(..., min_length=2)


class DistanceMatrixResponse(BaseModel):
    unit: str = "km"
    venue_ids: List[int]
    names: List[str]
    distances: List[List[float]]


class SearchSpaceResponse(BaseModel):
    venues: int
    tours: int
