import logging
from typing import Any

import numpy as np
from scipy.optimize import Bounds, NonlinearConstraint, OptimizeResult, minimize

from ..tc_types import NLPResult
from ..transcription import TranscribedNLP


logger = logging.getLogger(__name__)

_RESULT_FIELDS = ("x", "fun", "success", "status", "message")


def _build_nonlinear_constraints(nlp: TranscribedNLP) -> list[NonlinearConstraint]:
    """One stacked constraint so each evaluation point runs the dynamics once."""
    if nlp.n_inequality + nlp.n_equality == 0:
        return []

    lower, upper = nlp.constraint_bounds()
    return [NonlinearConstraint(nlp.stacked_constraints, lower, upper)]


def _extract_stats(result: OptimizeResult) -> dict[str, Any]:
    return {key: value for key, value in result.items() if key not in _RESULT_FIELDS}


def solve_with_scipy(nlp: TranscribedNLP, method: str, options: dict[str, object]) -> NLPResult:
    """Solve the transcribed NLP with scipy.optimize.minimize."""
    logger.debug("Calling scipy.optimize.minimize: method=%s, options=%s", method, options)

    result: OptimizeResult = minimize(
        nlp.objective,
        nlp.initial_point,
        method=method,
        bounds=Bounds(nlp.low, nlp.upp),
        constraints=_build_nonlinear_constraints(nlp),
        options=options,
    )

    return NLPResult(
        x=np.asarray(result.x, dtype=np.float64),
        objective=float(result.fun),
        success=bool(result.success),
        status=int(result.status),
        message=str(result.message),
        stats=_extract_stats(result),
    )
