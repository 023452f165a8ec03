"""Turn the solver's selected arcs into an ordered tour."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from ...errors import MalformedSolutionError
from .models import MIN_TOUR_SIZE, DistanceMatrix, Tour


def reconstruct_tour(
    arcs: Iterable[tuple[int, int]],
    venue_ids: Sequence[int],
    matrix: DistanceMatrix | None = None,
) -> Tour:
    """Follow the selected arcs from the first arc's origin back to itself.

    Raises MalformedSolutionError unless the arcs form exactly one cycle that
    visits every venue in ``venue_ids`` once.
    """
    arc_list = list(arcs)
    known = set(venue_ids)
    n = len(known)

    if n < MIN_TOUR_SIZE:
        raise MalformedSolutionError(f"A tour needs at least {MIN_TOUR_SIZE} venues, got {n}.")
    if len(arc_list) != n:
        raise MalformedSolutionError(f"Expected {n} selected arcs, got {len(arc_list)}.")

    for origin, destination in arc_list:
        if origin == destination:
            raise MalformedSolutionError(f"Self-loop selected at venue {origin}.")
        if origin not in known or destination not in known:
            raise MalformedSolutionError(f"Arc ({origin}, {destination}) references an unknown venue.")

    out_degree = Counter(origin for origin, _ in arc_list)
    in_degree = Counter(destination for _, destination in arc_list)
    for venue_id in known:
        if out_degree[venue_id] != 1 or in_degree[venue_id] != 1:
            raise MalformedSolutionError(
                f"Venue {venue_id} has {out_degree[venue_id]} outgoing and "
                f"{in_degree[venue_id]} incoming arcs; expected exactly one of each."
            )

    successor = dict(arc_list)
    start = arc_list[0][0]
    order = [start]
    current = successor[start]
    while current != start:
        order.append(current)
        current = successor[current]

    if len(order) != n:
        raise MalformedSolutionError(
            f"Selected arcs contain a sub-tour of {len(order)} venues starting at {start}; "
            f"expected one cycle through all {n} venues."
        )

    length = 0.0
    if matrix is not None:
        closed = order + [start]
        length = sum(matrix.distance(closed[k], closed[k + 1]) for k in range(n))
    return Tour(order=tuple(order), length=length)
