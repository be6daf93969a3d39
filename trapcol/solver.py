import logging
import time

from trapcol.input_validation import validate_solver_arguments
from trapcol.nlp import solve_nlp
from trapcol.problem import Problem
from trapcol.solution import Solution
from trapcol.tc_types import NLPResult
from trapcol.transcription import transcribe
from trapcol.utils.constants import DEFAULT_BACKEND, DEFAULT_SCIPY_METHOD


logger = logging.getLogger(__name__)


def solve_trapezoid(
    problem: Problem,
    nlp_options: dict[str, object] | None = None,
    backend: str = DEFAULT_BACKEND,
    method: str | None = DEFAULT_SCIPY_METHOD,
) -> Solution:
    """
    Solve an optimal control problem by trapezoidal direct collocation.

    Args:
        problem: Problem instance with functions, guess, bounds and grid size
        nlp_options: Optional solver options, passed through to the backend and
            replacing its defaults
        backend: "scipy" (scipy.optimize.minimize) or "ipopt" (CasADi nlpsol)
        method: scipy.optimize.minimize method ("SLSQP" or "trust-constr");
            ignored by the ipopt backend

    Returns:
        Solution with the decoded trajectory, objective value, solver status and
        diagnostics (including the wall-clock "nlp_time").

    Raises:
        trapcol.ConfigurationError: If the backend or method is not supported
        trapcol.DataIntegrityError: If the NLP cannot be evaluated at the initial guess
        trapcol.SolutionExtractionError: If the solver result cannot be decoded

    Examples:
        >>> # Minimum-time move of a single integrator from 0 to 1 with |u| <= 1
        >>> problem = Problem(
        ...     functions=UserFunctions(
        ...         dynamics=lambda t, x, u: u,
        ...         boundary_objective=lambda t0, x0, tf, xf: tf,
        ...     ),
        ...     guess=Guess(time=[0.0, 2.0], state=[0.0, 1.0], control=[0.5, 0.5]),
        ...     bounds=Bounds(
        ...         initial_time=Bound(0.0, 0.0),
        ...         final_time=Bound(0.0, 10.0),
        ...         initial_state=Bound(0.0, 0.0),
        ...         final_state=Bound(1.0, 1.0),
        ...         control=Bound(-1.0, 1.0),
        ...     ),
        ...     n_grid=3,
        ... )
        >>> solution = solve_trapezoid(problem)
        >>> solution.final_time  # doctest: +SKIP
        1.0
    """
    logger.info(
        "Starting trapezoidal collocation solve: problem='%s', backend=%s", problem.name, backend
    )
    logger.debug(
        "Problem dimensions: n_grid=%d, n_state=%d, n_control=%d",
        problem.n_grid,
        problem.n_state,
        problem.n_control,
    )

    validate_solver_arguments(backend, method)

    nlp = transcribe(problem)

    start = time.perf_counter()
    nlp_result: NLPResult = solve_nlp(nlp, backend=backend, method=method, options=nlp_options)
    nlp_time = time.perf_counter() - start

    if nlp_result.success:
        logger.info(
            "Trapezoidal collocation solve completed successfully: objective=%.6e, time=%.3fs",
            nlp_result.objective,
            nlp_time,
        )
    else:
        logger.warning(
            "Trapezoidal collocation solve failed: status=%s, message=%s",
            nlp_result.status,
            nlp_result.message,
        )

    return Solution(nlp_result, nlp.layout, problem.functions, nlp_time)
