import logging
from dataclasses import dataclass
from functools import partial

import numpy as np

from ..exceptions import DataIntegrityError
from ..problem import Problem
from ..tc_types import ConstraintCallback, FloatArray, ObjectiveCallback
from .bounds import expand_bounds
from .constraints import evaluate_constraints
from .guess import interpolate_guess
from .objective import evaluate_objective
from .packing import PackLayout, pack_decision_vector


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscribedNLP:
    """Everything an NLP backend needs: callbacks, bounds and the initial point."""

    layout: PackLayout
    objective: ObjectiveCallback
    constraints: ConstraintCallback
    initial_point: FloatArray
    low: FloatArray
    upp: FloatArray
    n_inequality: int
    n_equality: int

    def stacked_constraints(self, decision_vector: FloatArray) -> FloatArray:
        """Inequality rows followed by equality rows, for backends that take one g(z)."""
        inequality, equality = self.constraints(decision_vector)
        return np.concatenate([inequality, equality])

    def constraint_bounds(self) -> tuple[FloatArray, FloatArray]:
        """Row bounds for stacked_constraints: (-inf, 0] for inequalities, [0, 0] for equalities."""
        lower = np.concatenate([np.full(self.n_inequality, -np.inf), np.zeros(self.n_equality)])
        upper = np.zeros(self.n_inequality + self.n_equality)
        return lower, upper


def _measure_constraint_rows(
    constraints: ConstraintCallback, initial_point: FloatArray
) -> tuple[int, int]:
    try:
        inequality, equality = constraints(initial_point)
    except Exception as e:
        logger.error("Constraint evaluation failed at the initial point: %s", str(e))
        raise DataIntegrityError(
            f"Failed to evaluate constraints at the initial point: {e}",
            "trapcol transcription error",
        ) from e
    return inequality.size, equality.size


def transcribe(problem: Problem) -> TranscribedNLP:
    """
    Transcribe a Problem into NLP callbacks, bounds and an initial point.

    The guess is resampled onto the uniform grid and packed; its layout is shared
    by the bound vectors and both callbacks. The callbacks are pure functions of
    the decision vector.
    """
    functions = problem.functions

    guess_time, guess_state, guess_control = interpolate_guess(problem.guess, problem.n_grid)
    initial_point, layout = pack_decision_vector(guess_time, guess_state, guess_control)
    low, upp = expand_bounds(problem.bounds, layout)

    objective = partial(
        evaluate_objective,
        layout=layout,
        path_objective=functions.path_objective,
        boundary_objective=functions.boundary_objective,
    )
    constraints = partial(
        evaluate_constraints,
        layout=layout,
        dynamics=functions.dynamics,
        path_constraint=functions.path_constraint,
        boundary_constraint=functions.boundary_constraint,
    )

    n_inequality, n_equality = _measure_constraint_rows(constraints, initial_point)

    logger.debug(
        "Transcribed NLP: variables=%d, inequalities=%d, equalities=%d (defects=%d)",
        layout.n_decision,
        n_inequality,
        n_equality,
        layout.n_defects,
    )

    return TranscribedNLP(
        layout=layout,
        objective=objective,
        constraints=constraints,
        initial_point=initial_point,
        low=low,
        upp=upp,
        n_inequality=n_inequality,
        n_equality=n_equality,
    )
