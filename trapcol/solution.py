"""
Solution interface for trapezoidal collocation results.

A Solution is built once from the raw NLP result, decodes the decision vector
back into a trajectory and is read-only afterwards.
"""

import logging
from typing import Any

import numpy as np

from .exceptions import ConfigurationError, SolutionExtractionError
from .problem import UserFunctions
from .tc_types import FloatArray, NLPResult, NumericArrayLike
from .transcription import PackLayout, compute_defects, unpack_decision_vector
from .utils.constants import TIME_TOLERANCE


logger = logging.getLogger(__name__)


def _read_only(array: FloatArray) -> FloatArray:
    array = np.array(array, dtype=np.float64)
    array.flags.writeable = False
    return array


def _extract_decision_vector(nlp_result: NLPResult, layout: PackLayout) -> FloatArray:
    decision_vector = np.asarray(nlp_result.x, dtype=np.float64).ravel()

    if decision_vector.size != layout.n_decision:
        raise SolutionExtractionError(
            f"Solver returned {decision_vector.size} values, expected {layout.n_decision}",
            "Decision vector layout mismatch",
            solver_status=nlp_result.status,
            solver_message=nlp_result.message,
        )

    return decision_vector


class Solution:
    """Decoded trajectory, objective and solver diagnostics of one solve."""

    def __init__(
        self,
        nlp_result: NLPResult,
        layout: PackLayout,
        functions: UserFunctions,
        nlp_time: float,
    ) -> None:
        """
        Decode a raw NLP result.

        A result vector holding NaN or Inf (a diverged solve) still yields a
        Solution: ``success`` is forced to False, the solver status and message
        are kept as reported and ``defects`` is all NaN.

        Args:
            nlp_result: Raw result reported by the NLP backend
            layout: Layout of the decision vector used for the solve
            functions: User functions of the solved problem
            nlp_time: Wall-clock time spent in the NLP solver (seconds)

        Raises:
            trapcol.SolutionExtractionError: If the result vector does not match the layout
        """
        decision_vector = _extract_decision_vector(nlp_result, layout)
        time, state, control = unpack_decision_vector(decision_vector, layout)

        self.layout = layout
        self.decision_vector = _read_only(decision_vector)
        self.time = _read_only(time)
        self.state = _read_only(state)
        self.control = _read_only(control)

        self.is_finite = bool(np.all(np.isfinite(decision_vector)))
        self.objective = nlp_result.objective
        self.success = nlp_result.success and self.is_finite
        self.status = nlp_result.status
        self.message = nlp_result.message
        self.diagnostics: dict[str, Any] = {**nlp_result.stats, "nlp_time": nlp_time}

        if self.is_finite:
            derivatives = np.broadcast_to(
                np.asarray(functions.dynamics(time, state, control), dtype=np.float64),
                state.shape,
            )
            defects = compute_defects(time, state, control, functions.dynamics)
        else:
            logger.warning(
                "Solver result contains NaN or Inf values: status=%s, message=%s",
                self.status,
                self.message,
            )
            derivatives = np.full(state.shape, np.nan)
            defects = np.full((layout.n_state, layout.n_time - 1), np.nan)

        self._derivatives = _read_only(derivatives)
        self.defects = _read_only(defects)

        logger.debug(
            "Solution decoded: success=%s, max |defect|=%.3e",
            self.success,
            float(np.max(np.abs(self.defects))) if self.defects.size else 0.0,
        )

    @property
    def initial_time(self) -> float:
        return float(self.time[0])

    @property
    def final_time(self) -> float:
        return float(self.time[-1])

    @property
    def duration(self) -> float:
        return self.final_time - self.initial_time

    @property
    def nlp_time(self) -> float:
        return float(self.diagnostics["nlp_time"])

    @property
    def status_summary(self) -> dict[str, Any]:
        """
        Complete solution status information.

        Returns:
            Dictionary containing:
            - success: Whether optimization succeeded
            - status: Solver exit status as reported
            - message: Solver status message
            - objective: Objective function value
            - duration: Final minus initial time
            - nlp_time: Wall-clock seconds spent in the NLP solver
        """
        return {
            "success": self.success,
            "status": self.status,
            "message": self.message,
            "objective": self.objective,
            "duration": self.duration,
            "nlp_time": self.nlp_time,
        }

    def interpolate(self, query_time: float | NumericArrayLike) -> tuple[FloatArray, FloatArray]:
        """
        Evaluate the collocated trajectory between grid points.

        Control is piecewise linear. State is piecewise quadratic: the integral of
        the linearly interpolated dynamics from the left node of each interval,
        which is the trajectory implied by the trapezoidal rule. A reversed span
        (final time before initial time) is interpolated the same way.

        Args:
            query_time: Scalar or 1-D array of times between initial_time and final_time

        Returns:
            state (n_state, n_query), control (n_control, n_query)

        Raises:
            trapcol.ConfigurationError: If a query time lies outside the solved span
            trapcol.SolutionExtractionError: If the solver result is not finite
        """
        if not self.is_finite:
            raise SolutionExtractionError(
                "Cannot interpolate a solution containing NaN or Inf values",
                "Solution interpolation",
                solver_status=self.status,
                solver_message=self.message,
            )

        query = np.atleast_1d(np.asarray(query_time, dtype=np.float64)).ravel()
        span_start = min(self.initial_time, self.final_time)
        span_end = max(self.initial_time, self.final_time)
        if np.any(query < span_start - TIME_TOLERANCE) or np.any(
            query > span_end + TIME_TOLERANCE
        ):
            raise ConfigurationError(
                f"Query times must lie in [{span_start}, {span_end}]",
                "Solution interpolation",
            )

        n_time = self.layout.n_time
        dt = self.duration / (n_time - 1)
        if dt == 0.0:
            # Degenerate span: every query maps to the single time point.
            return (
                np.repeat(self.state[:, :1], query.size, axis=1),
                np.repeat(self.control[:, :1], query.size, axis=1),
            )

        # Position in grid steps; dt carries the sign of the span.
        steps = (query - self.initial_time) / dt
        interval = np.clip(np.floor(steps).astype(int), 0, n_time - 2)
        fraction = np.clip(steps - interval, 0.0, 1.0)
        tau = fraction * dt

        control_lower = self.control[:, interval]
        control_upper = self.control[:, interval + 1]
        control = control_lower + (control_upper - control_lower) * fraction

        state_lower = self.state[:, interval]
        derivative_lower = self._derivatives[:, interval]
        derivative_upper = self._derivatives[:, interval + 1]
        state = (
            state_lower
            + derivative_lower * tau
            + 0.5 * (derivative_upper - derivative_lower) * tau**2 / dt
        )

        return state, control
