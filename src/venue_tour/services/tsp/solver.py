"""OR-Tools MILP solver integration."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from ortools.linear_solver import pywraplp

from ...config import settings
from ...errors import InfeasibleError, SolverError
from .formulation import MilpModel, arc_var, build_tsp_model
from .models import DistanceMatrix, ObjectiveSense, Tour
from .reconstruct import reconstruct_tour

logger = logging.getLogger(__name__)

_STATUS_NAMES = {
    pywraplp.Solver.OPTIMAL: "OPTIMAL",
    pywraplp.Solver.FEASIBLE: "FEASIBLE",
    pywraplp.Solver.INFEASIBLE: "INFEASIBLE",
    pywraplp.Solver.UNBOUNDED: "UNBOUNDED",
    pywraplp.Solver.ABNORMAL: "ABNORMAL",
    pywraplp.Solver.MODEL_INVALID: "MODEL_INVALID",
    pywraplp.Solver.NOT_SOLVED: "NOT_SOLVED",
}


@dataclass(slots=True)
class SolverOptions:
    backend: str = settings.milp_backend
    time_limit_seconds: int = settings.solver_time_limit_seconds
    relative_gap: float = settings.solver_relative_gap
    num_threads: Optional[int] = settings.solver_num_threads


@dataclass(slots=True)
class MilpSolution:
    status: str
    objective_value: float
    values: dict[str, float]
    backend: str
    wall_time_ms: int
    metadata: dict = field(default_factory=dict)


def _create_solver(backend: str):
    return pywraplp.Solver.CreateSolver(backend)


def backend_available(backend: str | None = None) -> bool:
    """Return True if OR-Tools was built with the requested backend."""
    solver = _create_solver(backend or settings.milp_backend)
    return solver is not None


def _bound(value: float, infinity: float) -> float:
    if math.isinf(value):
        return infinity if value > 0 else -infinity
    return value


def solve_model(model: MilpModel, options: SolverOptions | None = None) -> MilpSolution:
    """Load ``model`` into a fresh backend solver and solve it to proven optimality."""

    options = options or SolverOptions()
    solver = _create_solver(options.backend)
    if solver is None:
        logger.error(f"OR-Tools backend '{options.backend}' is not available")
        raise SolverError(f"MILP backend '{options.backend}' is not available in this OR-Tools build.")

    infinity = solver.infinity()
    handles: dict[str, pywraplp.Variable] = {}
    for var in model.variables:
        lower, upper = _bound(var.lower, infinity), _bound(var.upper, infinity)
        if var.integer:
            handles[var.name] = solver.IntVar(lower, upper, var.name)
        else:
            handles[var.name] = solver.NumVar(lower, upper, var.name)

    for row in model.constraints:
        constraint = solver.Constraint(_bound(row.lower, infinity), _bound(row.upper, infinity), row.name)
        for name, coefficient in row.coefficients.items():
            constraint.SetCoefficient(handles[name], coefficient)

    objective = solver.Objective()
    for name, coefficient in model.objective.items():
        objective.SetCoefficient(handles[name], coefficient)
    if model.sense == "maximize":
        objective.SetMaximization()
    else:
        objective.SetMinimization()

    if options.time_limit_seconds:
        solver.SetTimeLimit(options.time_limit_seconds * 1000)
    if options.num_threads:
        solver.SetNumThreads(options.num_threads)

    parameters = pywraplp.MPSolverParameters()
    parameters.SetDoubleParam(pywraplp.MPSolverParameters.RELATIVE_MIP_GAP, options.relative_gap)

    logger.info(
        f"Solving tour MILP with {options.backend}: {solver.NumVariables()} variables, "
        f"{solver.NumConstraints()} constraints, sense={model.sense}"
    )
    status = solver.Solve(parameters)
    status_name = _STATUS_NAMES.get(status, str(status))
    wall_time_ms = int(solver.wall_time())

    if status == pywraplp.Solver.INFEASIBLE:
        raise InfeasibleError(f"Tour MILP over {model.size} venues is infeasible.")
    if status != pywraplp.Solver.OPTIMAL:
        logger.error(
            f"MILP backend {options.backend} stopped with status {status_name} after {wall_time_ms} ms "
            f"(time limit {options.time_limit_seconds}s)"
        )
        raise SolverError(
            f"MILP backend {options.backend} did not prove optimality (status {status_name})."
        )

    values = {name: handle.solution_value() for name, handle in handles.items()}
    objective_value = objective.Value()
    logger.info(f"Tour MILP solved: status={status_name}, objective={objective_value:.3f}, {wall_time_ms} ms")
    return MilpSolution(
        status=status_name,
        objective_value=objective_value,
        values=values,
        backend=options.backend,
        wall_time_ms=wall_time_ms,
        metadata={"nodes": solver.nodes(), "variables": len(handles), "constraints": len(model.constraints)},
    )


def selected_arcs(solution: MilpSolution, size: int) -> list[tuple[int, int]]:
    """Arcs whose binary variable was set to 1, ordered by (origin, destination)."""
    return [
        (i, j)
        for i in range(1, size + 1)
        for j in range(1, size + 1)
        if i != j and solution.values.get(arc_var(i, j), 0.0) > 0.5
    ]


def solve_tsp(
    matrix: DistanceMatrix,
    sense: ObjectiveSense = "minimize",
    options: SolverOptions | None = None,
) -> tuple[Tour, MilpSolution]:
    model = build_tsp_model(matrix, sense)
    solution = solve_model(model, options)
    arcs = selected_arcs(solution, matrix.size)
    tour = reconstruct_tour(arcs, list(matrix.venue_ids), matrix)
    return tour, solution
