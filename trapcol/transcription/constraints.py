# trapcol/transcription/constraints.py
"""
Constraint assembly for trapezoidal collocation: dynamics defects, path and
boundary constraints.
"""

import numpy as np

from ..tc_types import (
    BoundaryConstraintCallable,
    ConstraintResult,
    DynamicsCallable,
    FloatArray,
    PathConstraintCallable,
)
from .objective import grid_spacing
from .packing import PackLayout, unpack_decision_vector


_EMPTY: FloatArray = np.zeros(0, dtype=np.float64)


def compute_defects(
    time: FloatArray,
    state: FloatArray,
    control: FloatArray,
    dynamics: DynamicsCallable,
) -> FloatArray:
    """
    Trapezoidal defects between every pair of adjacent grid nodes.

    defect[:, k] = x[:, k+1] - x[:, k] - dt/2 * (f[:, k] + f[:, k+1])

    Returns:
        Defect matrix of shape (n_state, n_time - 1)
    """
    dt = grid_spacing(time, time.size)
    derivatives = np.broadcast_to(
        np.asarray(dynamics(time, state, control), dtype=np.float64), state.shape
    )

    state_lower = state[:, :-1]
    state_upper = state[:, 1:]
    derivative_lower = derivatives[:, :-1]
    derivative_upper = derivatives[:, 1:]

    return state_upper - state_lower - 0.5 * dt * (derivative_lower + derivative_upper)


def _as_residual_vector(values: object) -> FloatArray:
    if values is None:
        return _EMPTY
    return np.asarray(values, dtype=np.float64).ravel(order="F")


def _split_constraint_result(result: ConstraintResult) -> tuple[FloatArray, FloatArray]:
    inequality, equality = result
    return _as_residual_vector(inequality), _as_residual_vector(equality)


def evaluate_path_constraints(
    time: FloatArray,
    state: FloatArray,
    control: FloatArray,
    path_constraint: PathConstraintCallable | None,
) -> tuple[FloatArray, FloatArray]:
    if path_constraint is None:
        return _EMPTY, _EMPTY
    return _split_constraint_result(path_constraint(time, state, control))


def evaluate_boundary_constraints(
    time: FloatArray,
    state: FloatArray,
    boundary_constraint: BoundaryConstraintCallable | None,
) -> tuple[FloatArray, FloatArray]:
    if boundary_constraint is None:
        return _EMPTY, _EMPTY
    return _split_constraint_result(
        boundary_constraint(time[0], state[:, 0], time[-1], state[:, -1])
    )


def evaluate_constraints(
    decision_vector: FloatArray,
    layout: PackLayout,
    dynamics: DynamicsCallable,
    path_constraint: PathConstraintCallable | None,
    boundary_constraint: BoundaryConstraintCallable | None,
) -> tuple[FloatArray, FloatArray]:
    """
    Inequality and equality constraint vectors for one decision vector.

    Row order is fixed across calls:
        c   = [path inequalities, boundary inequalities]        (<= 0)
        ceq = [dynamics defects, path equalities, boundary equalities]  (== 0)

    The defect block lists all state channels of interval 0, then interval 1, ...
    """
    time, state, control = unpack_decision_vector(decision_vector, layout)

    defects = compute_defects(time, state, control, dynamics)
    ceq_dynamics = defects.ravel(order="F")

    c_path, ceq_path = evaluate_path_constraints(time, state, control, path_constraint)
    c_boundary, ceq_boundary = evaluate_boundary_constraints(time, state, boundary_constraint)

    inequality = np.concatenate([c_path, c_boundary])
    equality = np.concatenate([ceq_dynamics, ceq_path, ceq_boundary])
    return inequality, equality
