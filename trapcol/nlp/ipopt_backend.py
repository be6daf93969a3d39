# trapcol/nlp/ipopt_backend.py
"""
IPOPT backend through CasADi.

The transcription callbacks are plain numpy functions, so they are wrapped in
casadi.Callback objects and CasADi differentiates them by finite differences.
"""

import logging
from collections.abc import Callable
from typing import Any

import casadi as ca
import numpy as np

from ..tc_types import FloatArray, NLPResult
from ..transcription import TranscribedNLP


logger = logging.getLogger(__name__)

_CALLBACK_OPTIONS: dict[str, object] = {"enable_fd": True}


class DecisionVectorCallback(ca.Callback):
    """Expose a numpy function of the decision vector as a CasADi function."""

    def __init__(
        self,
        name: str,
        function: Callable[[FloatArray], Any],
        n_in: int,
        n_out: int,
        opts: dict[str, object] | None = None,
    ) -> None:
        ca.Callback.__init__(self)
        self._function = function
        self._n_in = n_in
        self._n_out = n_out
        self.construct(name, opts or dict(_CALLBACK_OPTIONS))

    def get_n_in(self) -> int:
        return 1

    def get_n_out(self) -> int:
        return 1

    def get_sparsity_in(self, i: int) -> ca.Sparsity:
        return ca.Sparsity.dense(self._n_in, 1)

    def get_sparsity_out(self, i: int) -> ca.Sparsity:
        return ca.Sparsity.dense(self._n_out, 1)

    def eval(self, arg: list[ca.DM]) -> list[ca.DM]:
        decision_vector = np.asarray(arg[0].full(), dtype=np.float64).ravel()
        value = np.atleast_1d(np.asarray(self._function(decision_vector), dtype=np.float64))
        return [ca.DM(value)]


def solve_with_ipopt(nlp: TranscribedNLP, options: dict[str, object]) -> NLPResult:
    """Solve the transcribed NLP with IPOPT via casadi.nlpsol."""
    n_decision = nlp.layout.n_decision
    n_constraints = nlp.n_inequality + nlp.n_equality

    objective_callback = DecisionVectorCallback("trapcol_objective", nlp.objective, n_decision, 1)
    constraint_callback = DecisionVectorCallback(
        "trapcol_constraints", nlp.stacked_constraints, n_decision, n_constraints
    )

    decision_symbol = ca.MX.sym("z", n_decision)
    nlp_definition = {
        "x": decision_symbol,
        "f": objective_callback(decision_symbol),
        "g": constraint_callback(decision_symbol),
    }

    logger.debug("Creating IPOPT solver: options=%s", options)
    solver = ca.nlpsol("trapcol_ipopt", "ipopt", nlp_definition, options)

    lbg, ubg = nlp.constraint_bounds()
    raw_solution = solver(x0=nlp.initial_point, lbx=nlp.low, ubx=nlp.upp, lbg=lbg, ubg=ubg)
    stats: dict[str, Any] = dict(solver.stats())

    return_status = str(stats.get("return_status", "unknown"))
    return NLPResult(
        x=np.asarray(raw_solution["x"].full(), dtype=np.float64).ravel(),
        objective=float(raw_solution["f"]),
        success=bool(stats.get("success", False)),
        status=return_status,
        message=return_status,
        stats=stats,
    )
