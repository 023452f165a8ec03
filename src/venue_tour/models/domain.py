"""Domain models for venue records."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Venue:
    """A point of interest visited by the tour."""

    venue_id: int
    name: str
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)
