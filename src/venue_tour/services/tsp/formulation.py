"""Miller-Tucker-Zemlin MILP formulation of the travelling salesman problem.

The model is kept as plain data (variables with bounds, constraints as
coefficient maps) so that it can be inspected in tests and handed to any MILP
backend.

  * Decision variables:
      x_i_j: binary, 1 if the tour travels directly from venue i to venue j.
          Created for every (i, j) pair; the diagonal is pinned to 0 through
          its upper bound so the index space stays dense.
      u_i: continuous visiting order for i = 2..n, bounded to [2, n].
  * Model:
      min/max  sum_i sum_j d_ij * x_i_j
      s.t.     sum_j x_i_j = 1                      for every i  (leave once)
               sum_i x_i_j = 1                      for every j  (enter once)
               u_i - u_j + (n - 1) * x_i_j <= n - 2 for i != j in 2..n

The degree constraints alone admit any union of disjoint cycles. The order
constraints force u to increase strictly along every selected arc that avoids
venue 1, so every cycle must pass through venue 1 and only one cycle remains.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ...errors import InfeasibleError
from .models import MIN_TOUR_SIZE, DistanceMatrix, ObjectiveSense

MTZ_ANCHOR = 1


@dataclass(frozen=True, slots=True)
class Variable:
    name: str
    lower: float
    upper: float
    integer: bool


@dataclass(slots=True)
class LinearConstraint:
    name: str
    coefficients: dict[str, float]
    lower: float = -math.inf
    upper: float = math.inf


@dataclass(slots=True)
class MilpModel:
    size: int
    sense: ObjectiveSense
    variables: list[Variable] = field(default_factory=list)
    constraints: list[LinearConstraint] = field(default_factory=list)
    objective: dict[str, float] = field(default_factory=dict)

    def variable(self, name: str) -> Variable:
        for var in self.variables:
            if var.name == name:
                return var
        raise KeyError(name)

    def constraint(self, name: str) -> LinearConstraint:
        for constraint in self.constraints:
            if constraint.name == name:
                return constraint
        raise KeyError(name)


def arc_var(origin: int, destination: int) -> str:
    return f"x_{origin}_{destination}"


def order_var(venue_id: int) -> str:
    return f"u_{venue_id}"


def _add_arc_variables(model: MilpModel, matrix: DistanceMatrix) -> None:
    for i in matrix.venue_ids:
        for j in matrix.venue_ids:
            name = arc_var(i, j)
            model.variables.append(Variable(name=name, lower=0.0, upper=0.0 if i == j else 1.0, integer=True))
            if i != j:
                model.objective[name] = matrix.distance(i, j)


def _add_degree_constraints(model: MilpModel, matrix: DistanceMatrix) -> None:
    ids = matrix.venue_ids
    for i in ids:
        model.constraints.append(
            LinearConstraint(
                name=f"out_{i}",
                coefficients={arc_var(i, j): 1.0 for j in ids},
                lower=1.0,
                upper=1.0,
            )
        )
    for j in ids:
        model.constraints.append(
            LinearConstraint(
                name=f"in_{j}",
                coefficients={arc_var(i, j): 1.0 for i in ids},
                lower=1.0,
                upper=1.0,
            )
        )


def _add_subtour_elimination(model: MilpModel, matrix: DistanceMatrix) -> None:
    n = matrix.size
    ordered = [venue_id for venue_id in matrix.venue_ids if venue_id != MTZ_ANCHOR]
    for i in ordered:
        model.variables.append(Variable(name=order_var(i), lower=2.0, upper=float(n), integer=False))
    for i in ordered:
        for j in ordered:
            if i == j:
                continue
            model.constraints.append(
                LinearConstraint(
                    name=f"mtz_{i}_{j}",
                    coefficients={order_var(i): 1.0, order_var(j): -1.0, arc_var(i, j): float(n - 1)},
                    upper=float(n - 2),
                )
            )


def build_tsp_model(matrix: DistanceMatrix, sense: ObjectiveSense = "minimize") -> MilpModel:
    """Formulate the tour over every venue in ``matrix`` as an MTZ MILP."""

    if matrix.size < MIN_TOUR_SIZE:
        raise InfeasibleError(
            f"A tour needs at least {MIN_TOUR_SIZE} venues, got {matrix.size}."
        )
    if sense not in ("minimize", "maximize"):
        raise ValueError(f"Unknown objective sense '{sense}'.")

    model = MilpModel(size=matrix.size, sense=sense)
    _add_arc_variables(model, matrix)
    _add_degree_constraints(model, matrix)
    _add_subtour_elimination(model, matrix)
    return model
