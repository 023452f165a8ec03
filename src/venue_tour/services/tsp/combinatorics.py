"""Size of the brute-force tour search space."""

from __future__ import annotations

import math

from ...errors import InvalidInputError


def count_hamiltonian_cycles(venue_count: int) -> int:
    """Number of distinct undirected tours through ``venue_count`` labelled venues.

    Fixing the start removes rotations, halving removes the two directions:
    (n - 1)! / 2.
    """
    if venue_count < 3:
        raise InvalidInputError(f"A tour needs at least 3 venues, got {venue_count}.")
    return math.factorial(venue_count - 1) // 2
