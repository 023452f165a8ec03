"""Error taxonomy for the tour planning pipeline.

Every error is terminal for the run that raised it: there is no partial-result
mode, either a complete tour is produced or one of these is raised.
"""

from __future__ import annotations


class TourPlanningError(Exception):
    """Base class for all tour planning failures."""


class InvalidInputError(TourPlanningError, ValueError):
    """Malformed or insufficient venue data."""


class InfeasibleError(TourPlanningError):
    """The tour MILP admits no feasible solution."""


class SolverError(TourPlanningError):
    """The MILP backend failed or could not prove optimality."""


class MalformedSolutionError(TourPlanningError):
    """Selected arcs do not form a single cycle through every venue."""
