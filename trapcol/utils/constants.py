from typing import TypeAlias


_Tolerance: TypeAlias = float

TIME_TOLERANCE: _Tolerance = 1e-12
"""Slack allowed when checking that a query time lies inside the solved span."""

DEFAULT_N_GRID: int = 25
"""Default number of grid points used by the transcription."""

MIN_N_GRID: int = 2
"""A trapezoidal grid needs at least one interval."""

# NLP backend defaults - SINGLE SOURCE OF TRUTH
SUPPORTED_BACKENDS: tuple[str, ...] = ("scipy", "ipopt")
"""NLP backends known to the solver adapter."""

DEFAULT_BACKEND: str = "scipy"
"""Default NLP backend."""

DEFAULT_SCIPY_METHOD: str = "SLSQP"
"""Default scipy.optimize.minimize method."""

SUPPORTED_SCIPY_METHODS: tuple[str, ...] = ("SLSQP", "trust-constr")
"""scipy methods that accept bounds together with nonlinear constraints."""

DEFAULT_SCIPY_OPTIONS: dict[str, object] = {
    "maxiter": 500,
    "ftol": 1e-9,
}
"""Default options for the SLSQP method."""

DEFAULT_TRUST_CONSTR_OPTIONS: dict[str, object] = {
    "maxiter": 2000,
    "gtol": 1e-8,
}
"""Default options for the trust-constr method."""

DEFAULT_IPOPT_OPTIONS: dict[str, object] = {
    "ipopt.print_level": 0,
    "ipopt.sb": "yes",
    "print_time": 0,
    "ipopt.hessian_approximation": "limited-memory",
}
"""Default CasADi/IPOPT options; the callbacks only provide finite-difference derivatives."""
