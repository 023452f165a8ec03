"""Tour planning domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Sequence

from ...errors import InvalidInputError
from ...models.domain import Venue

ObjectiveSense = Literal["minimize", "maximize"]

MIN_TOUR_SIZE = 3


@dataclass(frozen=True, slots=True)
class DistanceMatrix:
    """Square table of non-negative distances indexed by venue id (1..n)."""

    rows: tuple[tuple[float, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "DistanceMatrix":
        size = len(rows)
        if size < 2:
            raise InvalidInputError(f"Distance matrix needs at least 2 rows, got {size}.")
        frozen: list[tuple[float, ...]] = []
        for i, row in enumerate(rows):
            if len(row) != size:
                raise InvalidInputError(f"Distance matrix row {i + 1} has {len(row)} entries, expected {size}.")
            values = tuple(float(value) for value in row)
            for j, value in enumerate(values):
                if not math.isfinite(value) or value < 0:
                    raise InvalidInputError(
                        f"Distance from {i + 1} to {j + 1} must be finite and non-negative, got {value}."
                    )
            if values[i] != 0:
                raise InvalidInputError(f"Distance from venue {i + 1} to itself must be 0, got {values[i]}.")
            frozen.append(values)
        return cls(rows=tuple(frozen))

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def venue_ids(self) -> range:
        return range(1, self.size + 1)

    def distance(self, origin: int, destination: int) -> float:
        if not (1 <= origin <= self.size and 1 <= destination <= self.size):
            raise KeyError(f"Venue ids must be in 1..{self.size}, got ({origin}, {destination}).")
        return self.rows[origin - 1][destination - 1]

    def as_lists(self) -> list[list[float]]:
        return [list(row) for row in self.rows]


@dataclass(frozen=True, slots=True)
class Tour:
    """Ordered cycle of venue ids; the return to the first venue is implicit."""

    order: tuple[int, ...]
    length: float

    def __len__(self) -> int:
        return len(self.order)

    @property
    def start(self) -> int:
        return self.order[0]

    def closed(self) -> tuple[int, ...]:
        return self.order + (self.order[0],)

    def arcs(self) -> list[tuple[int, int]]:
        sequence = self.closed()
        return [(sequence[k], sequence[k + 1]) for k in range(len(self.order))]


@dataclass(slots=True)
class TourPlan:
    venues: tuple[Venue, ...]
    matrix: DistanceMatrix
    tour: Tour
    sense: ObjectiveSense
    objective_value: float
    status: str
    backend: str
    solver_wall_time_ms: int
    elapsed_seconds: float
    metadata: dict = field(default_factory=dict)

    def venue(self, venue_id: int) -> Venue:
        return self.venues[venue_id - 1]


@dataclass(slots=True)
class TourStop:
    sequence: int
    venue_id: int
    name: str
    latitude: float
    longitude: float
    distance_from_prev_km: float
    cumulative_distance_km: float


def tour_stops(plan: TourPlan) -> list[TourStop]:
    """Stops in visiting order, ending with the return to the first venue."""

    stops: list[TourStop] = []
    cumulative = 0.0
    previous: int | None = None
    for sequence, venue_id in enumerate(plan.tour.closed(), start=1):
        leg = 0.0 if previous is None else plan.matrix.distance(previous, venue_id)
        cumulative += leg
        venue = plan.venue(venue_id)
        stops.append(
            TourStop(
                sequence=sequence,
                venue_id=venue_id,
                name=venue.name,
                latitude=venue.latitude,
                longitude=venue.longitude,
                distance_from_prev_km=leg,
                cumulative_distance_km=cumulative,
            )
        )
        previous = venue_id
    return stops
