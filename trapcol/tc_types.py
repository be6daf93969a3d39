# trapcol/tc_types.py
"""
Core type definitions for the trapcol trapezoidal collocation package.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray


# --- NUMERICAL TYPES ---
FloatArray: TypeAlias = NDArray[np.float64]
NumericArrayLike: TypeAlias = (
    NDArray[np.floating[Any]]
    | NDArray[np.integer[Any]]
    | Sequence[float]
    | Sequence[int]
    | list[float]
    | list[int]
)

BoundInput: TypeAlias = float | int | NumericArrayLike | None
"""
Type alias for one side of a variable bound.

Supported input types:
- float/int: Same bound for every channel
- sequence/array: One bound per channel
- None: Unbounded on this side
"""


# --- USER FUNCTION SIGNATURES ---
DynamicsCallable: TypeAlias = Callable[[FloatArray, FloatArray, FloatArray], FloatArray]
"""dynamics(t, x, u) -> dx, with dx shaped like x (n_state, n_time)."""

PathObjectiveCallable: TypeAlias = Callable[[FloatArray, FloatArray, FloatArray], FloatArray]
"""path_objective(t, x, u) -> integrand sampled at every grid node (n_time,)."""

BoundaryObjectiveCallable: TypeAlias = Callable[[float, FloatArray, float, FloatArray], float]
"""boundary_objective(t0, x0, tF, xF) -> scalar cost."""

ConstraintResult: TypeAlias = tuple[NumericArrayLike | None, NumericArrayLike | None]
"""(inequality residuals <= 0, equality residuals == 0)."""

PathConstraintCallable: TypeAlias = Callable[[FloatArray, FloatArray, FloatArray], ConstraintResult]
"""path_constraint(t, x, u) -> (c, ceq)."""

BoundaryConstraintCallable: TypeAlias = Callable[
    [float, FloatArray, float, FloatArray], ConstraintResult
]
"""boundary_constraint(t0, x0, tF, xF) -> (c, ceq)."""

ObjectiveCallback: TypeAlias = Callable[[FloatArray], float]
"""NLP objective: decision vector -> scalar."""

ConstraintCallback: TypeAlias = Callable[[FloatArray], tuple[FloatArray, FloatArray]]
"""NLP constraints: decision vector -> (inequality vector, equality vector)."""


# --- SOLVER BOUNDARY CONTAINERS ---
@dataclass(frozen=True)
class NLPResult:
    """Raw outcome of one NLP solve, as reported by the backend."""

    x: FloatArray
    objective: float
    success: bool
    status: int | str
    message: str
    stats: dict[str, Any] = field(default_factory=dict)
