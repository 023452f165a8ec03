import math

import pytest

from src.venue_tour.errors import InfeasibleError
from src.venue_tour.services.tsp.formulation import MTZ_ANCHOR, arc_var, build_tsp_model, order_var
from src.venue_tour.services.tsp.models import DistanceMatrix


def _matrix(n: int) -> DistanceMatrix:
    return DistanceMatrix.from_rows([[0 if i == j else 10 * i + j for j in range(1, n + 1)] for i in range(1, n + 1)])


def test_model_sizes_for_four_venues():
    model = build_tsp_model(_matrix(4))

    arc_vars = [var for var in model.variables if var.name.startswith("x_")]
    order_vars = [var for var in model.variables if var.name.startswith("u_")]
    assert len(arc_vars) == 16
    assert len(order_vars) == 3
    # 4 outgoing + 4 incoming degree rows, and one MTZ row per ordered pair of non-anchor venues.
    assert len(model.constraints) == 8 + 3 * 2
    assert model.sense == "minimize"


def test_arc_variables_are_binary_with_pinned_diagonal():
    model = build_tsp_model(_matrix(4))

    for i in range(1, 5):
        diagonal = model.variable(arc_var(i, i))
        assert diagonal.integer and diagonal.upper == 0.0
        for j in range(1, 5):
            if i != j:
                var = model.variable(arc_var(i, j))
                assert var.integer
                assert (var.lower, var.upper) == (0.0, 1.0)


def test_objective_uses_matrix_distances():
    matrix = _matrix(4)
    model = build_tsp_model(matrix, "maximize")

    assert model.sense == "maximize"
    assert model.objective[arc_var(2, 3)] == matrix.distance(2, 3)
    assert model.objective[arc_var(3, 2)] == matrix.distance(3, 2)
    assert arc_var(1, 1) not in model.objective


def test_degree_constraints_cover_rows_and_columns():
    model = build_tsp_model(_matrix(4))

    outgoing = model.constraint("out_2")
    incoming = model.constraint("in_3")
    assert set(outgoing.coefficients) == {arc_var(2, j) for j in range(1, 5)}
    assert set(incoming.coefficients) == {arc_var(i, 3) for i in range(1, 5)}
    assert (outgoing.lower, outgoing.upper) == (1.0, 1.0)
    assert (incoming.lower, incoming.upper) == (1.0, 1.0)


def test_order_variables_skip_the_anchor():
    model = build_tsp_model(_matrix(5))

    with pytest.raises(KeyError):
        model.variable(order_var(MTZ_ANCHOR))
    for venue_id in range(2, 6):
        var = model.variable(order_var(venue_id))
        assert not var.integer
        assert (var.lower, var.upper) == (2.0, 5.0)
    assert not any(
        order_var(MTZ_ANCHOR) in constraint.coefficients or arc_var(MTZ_ANCHOR, 2) in constraint.coefficients
        for constraint in model.constraints
        if constraint.name.startswith("mtz_")
    )


def test_mtz_constraint_coefficients():
    model = build_tsp_model(_matrix(4))

    constraint = model.constraint("mtz_2_3")
    assert constraint.coefficients == {order_var(2): 1.0, order_var(3): -1.0, arc_var(2, 3): 3.0}
    assert constraint.upper == 2.0
    assert constraint.lower == -math.inf


def test_mtz_rules_out_a_two_cycle_away_from_the_anchor():
    model = build_tsp_model(_matrix(4))
    forward = model.constraint("mtz_3_4")
    backward = model.constraint("mtz_4_3")

    # Adding both rows cancels the order variables; with x_3_4 = x_4_3 = 1 the
    # left side exceeds the right side, so the sub-tour 3 -> 4 -> 3 is cut off.
    lhs = forward.coefficients[arc_var(3, 4)] + backward.coefficients[arc_var(4, 3)]
    assert forward.coefficients[order_var(3)] + backward.coefficients[order_var(3)] == 0
    assert lhs > forward.upper + backward.upper


def test_two_venues_are_infeasible():
    with pytest.raises(InfeasibleError):
        build_tsp_model(_matrix(2))


def test_unknown_sense_is_rejected():
    with pytest.raises(ValueError):
        build_tsp_model(_matrix(3), "sideways")
