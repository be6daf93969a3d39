# trapcol/__init__.py
"""
trapcol: trapezoidal direct collocation for optimal control.

This package transcribes a continuous-time optimal control problem into a
nonlinear program with the trapezoidal rule, solves it with scipy or IPOPT and
decodes the result back into a trajectory.

Logging:
By default, trapcol produces no output. To enable logging::

    import logging
    logging.basicConfig(format="%(name)s  - %(message)s")
    logging.getLogger('trapcol').setLevel(logging.INFO)  # Major operations
    logging.getLogger('trapcol').setLevel(logging.DEBUG)  # Detailed debugging
"""

import logging

# Import trapcol-specific exceptions for user access
from trapcol.exceptions import (
    ConfigurationError,
    DataIntegrityError,
    SolutionExtractionError,
    TrapcolBaseError,
)
from trapcol.problem import Bound, Bounds, Guess, Problem, UserFunctions
from trapcol.solution import Solution
from trapcol.solver import solve_trapezoid


__all__ = [
    "Bound",
    "Bounds",
    "ConfigurationError",
    "DataIntegrityError",
    "Guess",
    "Problem",
    "Solution",
    "SolutionExtractionError",
    "TrapcolBaseError",
    "UserFunctions",
    "solve_trapezoid",
]

__version__ = "0.1.0"


# Silent by default, user controls everything
logging.getLogger(__name__).addHandler(logging.NullHandler())
