import logging
import math
from typing import Any

import numpy as np

from .exceptions import ConfigurationError, DataIntegrityError
from .tc_types import BoundInput, FloatArray
from .utils.constants import MIN_N_GRID, SUPPORTED_BACKENDS, SUPPORTED_SCIPY_METHODS


logger = logging.getLogger(__name__)


# ============================================================================
# CORE VALIDATION PRIMITIVES
# ============================================================================


def validate_positive_integer(value: Any, name: str, min_value: int = 1) -> None:
    """Single source for positive integer validation."""
    if isinstance(value, bool) or not isinstance(value, int | np.integer):
        raise ConfigurationError(f"{name} must be integer, got {type(value)}")
    if value < min_value:
        raise ConfigurationError(f"{name} must be >= {min_value}, got {value}")


def validate_callable(value: Any, name: str, optional: bool = True) -> None:
    """Single source for user function validation."""
    if value is None:
        if optional:
            return
        raise ConfigurationError(f"{name} function is required")
    if not callable(value):
        raise ConfigurationError(f"{name} must be callable or None, got {type(value)}")


def validate_array_numerical_integrity(
    array: FloatArray, name: str, context: str = "validation"
) -> None:
    """Single source for NaN/Inf validation."""
    if np.any(np.isnan(array)) or np.any(np.isinf(array)):
        raise DataIntegrityError(
            f"{name} contains NaN or Inf values", f"Numerical corruption in {context}"
        )


# ============================================================================
# GUESS VALIDATION
# ============================================================================


def validate_guess_arrays(time: FloatArray, state: FloatArray, control: FloatArray) -> None:
    """Guess grid must be 1-D, strictly increasing and match the trajectory columns."""
    if time.ndim != 1:
        raise ConfigurationError(f"Guess time must be 1-D, got shape {time.shape}")
    if time.size < 2:
        raise ConfigurationError(f"Guess needs at least 2 time points, got {time.size}")
    validate_array_numerical_integrity(time, "Guess time", "guess validation")
    if not np.all(np.diff(time) > 0.0):
        raise ConfigurationError("Guess time values must be strictly increasing")

    for array, name in [(state, "state"), (control, "control")]:
        if array.ndim != 2:
            raise ConfigurationError(f"Guess {name} must be 2-D (channels, time), got {array.ndim}-D")
        if array.shape[1] != time.size:
            raise ConfigurationError(
                f"Guess {name} has {array.shape[1]} columns, expected {time.size}",
                "Guess columns must match guess time points",
            )

    if state.shape[0] == 0:
        raise ConfigurationError("Guess must have at least one state channel")


# ============================================================================
# BOUND VALIDATION
# ============================================================================


def _bound_as_array(value: BoundInput, fill: float, size: int, name: str) -> FloatArray:
    if value is None:
        return np.full(size, fill, dtype=np.float64)

    array = np.asarray(value, dtype=np.float64)
    if array.ndim == 0:
        if math.isnan(float(array)):
            raise ConfigurationError(f"{name} cannot be NaN")
        return np.full(size, float(array), dtype=np.float64)

    array = array.ravel()
    if array.size != size:
        raise ConfigurationError(f"{name} has {array.size} entries, expected 1 or {size}")
    if np.any(np.isnan(array)):
        raise ConfigurationError(f"{name} cannot contain NaN")
    return array


def validate_bound_pair(low: BoundInput, upp: BoundInput, size: int, name: str) -> None:
    """Check sizes and ordering of one low/upp bound pair."""
    low_array = _bound_as_array(low, -np.inf, size, f"{name} low bound")
    upp_array = _bound_as_array(upp, np.inf, size, f"{name} upper bound")

    if np.any(low_array > upp_array):
        raise ConfigurationError(
            f"{name} lower bound {low_array} exceeds upper bound {upp_array}"
        )


def validate_bounds(bounds: Any, num_states: int, num_controls: int) -> None:
    """SINGLE SOURCE for complete bound validation."""
    for name in ("initial_time", "final_time"):
        bound = getattr(bounds, name)
        for side in (bound.low, bound.upp):
            if side is not None and np.ndim(side) != 0:
                raise ConfigurationError(f"{name} bounds must be scalars, got {side!r}")
        validate_bound_pair(bound.low, bound.upp, 1, name)

    for name in ("initial_state", "state", "final_state"):
        bound = getattr(bounds, name)
        validate_bound_pair(bound.low, bound.upp, num_states, name)

    validate_bound_pair(bounds.control.low, bounds.control.upp, num_controls, "control")


# ============================================================================
# PROBLEM VALIDATION
# ============================================================================


def validate_user_functions(functions: Any) -> None:
    """Dynamics is required; every other user function is optional."""
    validate_callable(functions.dynamics, "dynamics", optional=False)
    for name in (
        "path_objective",
        "boundary_objective",
        "path_constraint",
        "boundary_constraint",
    ):
        validate_callable(getattr(functions, name), name)


def validate_problem_ready_for_solving(problem: Any) -> None:
    """SINGLE SOURCE - MASTER validation for solve readiness."""
    validate_positive_integer(problem.n_grid, "n_grid", min_value=MIN_N_GRID)
    validate_user_functions(problem.functions)
    validate_guess_arrays(problem.guess.time, problem.guess.state, problem.guess.control)
    validate_bounds(problem.bounds, problem.n_state, problem.n_control)
    logger.debug(
        "Problem '%s' validated: n_grid=%d, n_state=%d, n_control=%d",
        problem.name,
        problem.n_grid,
        problem.n_state,
        problem.n_control,
    )


def validate_solver_arguments(backend: str, method: str | None) -> None:
    """Check the backend/method pair before any work is done."""
    if backend not in SUPPORTED_BACKENDS:
        raise ConfigurationError(
            f"Unknown NLP backend '{backend}'", f"Supported backends: {SUPPORTED_BACKENDS}"
        )
    if backend == "scipy" and method is not None and method not in SUPPORTED_SCIPY_METHODS:
        raise ConfigurationError(
            f"Unsupported scipy method '{method}'",
            f"Supported methods: {SUPPORTED_SCIPY_METHODS}",
        )

