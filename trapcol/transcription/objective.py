# trapcol/transcription/objective.py
"""
Objective assembly: trapezoidal quadrature of the path cost plus the boundary cost.
"""

import numpy as np

from ..tc_types import BoundaryObjectiveCallable, FloatArray, PathObjectiveCallable
from .packing import PackLayout, unpack_decision_vector


def grid_spacing(time: FloatArray, n_time: int) -> float:
    """Uniform step of the transcription grid."""
    return float((time[-1] - time[0]) / (n_time - 1))


def trapezoid_quadrature(integrand: FloatArray, dt: float) -> float:
    """Composite trapezoidal rule on a uniform grid."""
    values = np.asarray(integrand, dtype=np.float64).ravel()
    return float(dt * (0.5 * (values[0] + values[-1]) + np.sum(values[1:-1])))


def evaluate_integral_cost(
    time: FloatArray,
    state: FloatArray,
    control: FloatArray,
    path_objective: PathObjectiveCallable | None,
) -> float:
    if path_objective is None:
        return 0.0

    dt = grid_spacing(time, time.size)
    integrand = np.broadcast_to(np.ravel(path_objective(time, state, control)), time.shape)
    return trapezoid_quadrature(integrand, dt)


def evaluate_boundary_cost(
    time: FloatArray,
    state: FloatArray,
    boundary_objective: BoundaryObjectiveCallable | None,
) -> float:
    if boundary_objective is None:
        return 0.0

    # One-element arrays such as -xf on a single-state problem count as scalars.
    value = boundary_objective(time[0], state[:, 0], time[-1], state[:, -1])
    return float(np.asarray(value, dtype=np.float64).item())


def evaluate_objective(
    decision_vector: FloatArray,
    layout: PackLayout,
    path_objective: PathObjectiveCallable | None,
    boundary_objective: BoundaryObjectiveCallable | None,
) -> float:
    """
    Scalar NLP objective for one decision vector.

    Either term may be omitted independently; an omitted term contributes 0.
    """
    time, state, control = unpack_decision_vector(decision_vector, layout)

    integral_cost = evaluate_integral_cost(time, state, control, path_objective)
    boundary_cost = evaluate_boundary_cost(time, state, boundary_objective)

    return boundary_cost + integral_cost
