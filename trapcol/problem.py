"""
Problem definition for trapezoidal direct collocation.

A Problem is an immutable bundle of bounds, user functions, an initial guess
and the grid resolution. Validation runs once on construction so the
transcription layer can assume well-formed inputs.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .input_validation import validate_problem_ready_for_solving
from .tc_types import (
    BoundaryConstraintCallable,
    BoundaryObjectiveCallable,
    BoundInput,
    DynamicsCallable,
    FloatArray,
    NumericArrayLike,
    PathConstraintCallable,
    PathObjectiveCallable,
)
from .utils.constants import DEFAULT_N_GRID


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bound:
    """Lower and upper bound for one group of decision variables (None = unbounded)."""

    low: BoundInput = None
    upp: BoundInput = None


@dataclass(frozen=True)
class Bounds:
    """
    Variable bounds for the whole trajectory.

    ``initial_state`` and ``final_state`` apply only to the first and last grid
    nodes; ``state`` applies to every interior node. ``control`` applies to all
    nodes.
    """

    initial_time: Bound = field(default_factory=Bound)
    final_time: Bound = field(default_factory=Bound)
    initial_state: Bound = field(default_factory=Bound)
    state: Bound = field(default_factory=Bound)
    final_state: Bound = field(default_factory=Bound)
    control: Bound = field(default_factory=Bound)


@dataclass(frozen=True, eq=False)
class Guess:
    """
    Initial guess trajectory on an arbitrary, strictly increasing time grid.

    State and control are (channels, time) arrays; a 1-D sequence is one channel.
    A problem without controls passes an array of shape (0, len(time)).
    """

    time: FloatArray | NumericArrayLike
    state: FloatArray | NumericArrayLike
    control: FloatArray | NumericArrayLike

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", np.asarray(self.time, dtype=np.float64))
        object.__setattr__(self, "state", np.atleast_2d(np.asarray(self.state, dtype=np.float64)))
        object.__setattr__(self, "control", np.atleast_2d(np.asarray(self.control, dtype=np.float64)))

    @property
    def n_state(self) -> int:
        return int(self.state.shape[0])

    @property
    def n_control(self) -> int:
        return int(self.control.shape[0])


@dataclass(frozen=True)
class UserFunctions:
    """
    User-supplied problem functions, all vectorized over the grid.

    Only ``dynamics`` is required. A missing cost contributes zero and a
    missing constraint function contributes no rows.
    """

    dynamics: DynamicsCallable
    path_objective: PathObjectiveCallable | None = None
    boundary_objective: BoundaryObjectiveCallable | None = None
    path_constraint: PathConstraintCallable | None = None
    boundary_constraint: BoundaryConstraintCallable | None = None


@dataclass(frozen=True)
class Problem:
    """
    Single-phase optimal control problem for trapezoidal collocation.

    Args:
        functions: Dynamics, costs and constraints
        guess: Initial guess trajectory (resampled onto the transcription grid)
        bounds: Bounds on time, state and control
        n_grid: Number of grid points used by the transcription
        name: Label used in log messages

    Raises:
        trapcol.ConfigurationError: If any part of the problem is inconsistent

    Examples:
        >>> problem = Problem(
        ...     functions=UserFunctions(
        ...         dynamics=lambda t, x, u: u,
        ...         boundary_objective=lambda t0, x0, tf, xf: tf,
        ...     ),
        ...     guess=Guess(time=[0.0, 1.0], state=[0.0, 1.0], control=[1.0, 1.0]),
        ...     bounds=Bounds(
        ...         initial_time=Bound(0.0, 0.0),
        ...         final_time=Bound(0.0, 10.0),
        ...         initial_state=Bound(0.0, 0.0),
        ...         final_state=Bound(1.0, 1.0),
        ...         control=Bound(-1.0, 1.0),
        ...     ),
        ...     n_grid=3,
        ... )
    """

    functions: UserFunctions
    guess: Guess
    bounds: Bounds = field(default_factory=Bounds)
    n_grid: int = DEFAULT_N_GRID
    name: str = "Trapezoidal Collocation Problem"

    def __post_init__(self) -> None:
        validate_problem_ready_for_solving(self)
        logger.debug("Created problem '%s'", self.name)

    @property
    def n_state(self) -> int:
        return self.guess.n_state

    @property
    def n_control(self) -> int:
        return self.guess.n_control
