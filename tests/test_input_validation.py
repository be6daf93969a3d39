import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from trapcol import (
    Bound,
    Bounds,
    ConfigurationError,
    DataIntegrityError,
    Guess,
    Problem,
    SolutionExtractionError,
    TrapcolBaseError,
    UserFunctions,
    solve_trapezoid,
)
from trapcol.solution import Solution
from trapcol.tc_types import NLPResult
from trapcol.transcription import PackLayout, transcribe


def _functions(**kwargs):
    return UserFunctions(dynamics=lambda t, x, u: u, **kwargs)


def _guess():
    return Guess(time=[0.0, 1.0], state=[0.0, 1.0], control=[1.0, 1.0])


class TestProblemValidation:
    def test_valid_problem_constructs(self):
        problem = Problem(functions=_functions(), guess=_guess(), n_grid=2)

        assert problem.n_state == 1
        assert problem.n_control == 1

    @pytest.mark.parametrize("n_grid", [1, 0, -3])
    def test_grid_too_small(self, n_grid):
        with pytest.raises(ConfigurationError, match="n_grid"):
            Problem(functions=_functions(), guess=_guess(), n_grid=n_grid)

    @pytest.mark.parametrize("n_grid", [2.5, "10", True])
    def test_grid_not_integer(self, n_grid):
        with pytest.raises(ConfigurationError, match="n_grid"):
            Problem(functions=_functions(), guess=_guess(), n_grid=n_grid)

    def test_missing_dynamics(self):
        with pytest.raises(ConfigurationError, match="dynamics"):
            Problem(functions=UserFunctions(dynamics=None), guess=_guess())

    def test_non_callable_objective(self):
        with pytest.raises(ConfigurationError, match="path_objective"):
            Problem(functions=_functions(path_objective=3.0), guess=_guess())

    @pytest.mark.parametrize(
        "time",
        [[0.0, 0.0, 1.0], [0.0, 2.0, 1.0], [1.0, 0.0, -1.0]],
    )
    def test_guess_time_not_strictly_increasing(self, time):
        guess = Guess(time=time, state=[0.0, 0.5, 1.0], control=[0.0, 0.0, 0.0])

        with pytest.raises(ConfigurationError, match="strictly increasing"):
            Problem(functions=_functions(), guess=guess)

    def test_guess_single_point(self):
        guess = Guess(time=[0.0], state=[0.0], control=[0.0])

        with pytest.raises(ConfigurationError, match="at least 2"):
            Problem(functions=_functions(), guess=guess)

    def test_guess_column_mismatch(self):
        guess = Guess(time=[0.0, 1.0, 2.0], state=[0.0, 1.0], control=[0.0, 0.0, 0.0])

        with pytest.raises(ConfigurationError, match="columns"):
            Problem(functions=_functions(), guess=guess)

    def test_guess_time_with_nan(self):
        guess = Guess(time=[0.0, np.nan], state=[0.0, 1.0], control=[0.0, 0.0])

        with pytest.raises(DataIntegrityError):
            Problem(functions=_functions(), guess=guess)

    def test_lower_bound_exceeds_upper(self):
        with pytest.raises(ConfigurationError, match="exceeds"):
            Problem(
                functions=_functions(),
                guess=_guess(),
                bounds=Bounds(control=Bound(1.0, -1.0)),
            )

    def test_final_time_bounds_inverted(self):
        with pytest.raises(ConfigurationError, match="final_time"):
            Problem(
                functions=_functions(),
                guess=_guess(),
                bounds=Bounds(final_time=Bound(5.0, 1.0)),
            )

    def test_wrong_state_bound_size(self):
        with pytest.raises(ConfigurationError, match="expected 1 or 1"):
            Problem(
                functions=_functions(),
                guess=_guess(),
                bounds=Bounds(state=Bound([0.0, 0.0], [1.0, 1.0])),
            )

    def test_vector_time_bound_rejected(self):
        with pytest.raises(ConfigurationError, match="scalars"):
            Problem(
                functions=_functions(),
                guess=_guess(),
                bounds=Bounds(initial_time=Bound([0.0, 0.0], None)),
            )

    def test_nan_bound_rejected(self):
        with pytest.raises(ConfigurationError, match="NaN"):
            Problem(
                functions=_functions(),
                guess=_guess(),
                bounds=Bounds(initial_state=Bound(np.nan, 1.0)),
            )

    def test_one_sided_bounds_accepted(self):
        problem = Problem(
            functions=_functions(),
            guess=_guess(),
            bounds=Bounds(final_time=Bound(low=0.5), control=Bound(upp=2.0)),
        )

        assert problem.bounds.final_time.upp is None

    def test_problem_is_immutable(self, min_time_problem):
        with pytest.raises(AttributeError):
            min_time_problem.n_grid = 10

    def test_errors_share_base_class(self):
        for error in (ConfigurationError, DataIntegrityError, SolutionExtractionError):
            assert issubclass(error, TrapcolBaseError)

    def test_error_message_includes_context(self):
        error = ConfigurationError("Bad value", "while testing")

        assert str(error) == "Bad value (Context: while testing)"


class TestSolverArgumentValidation:
    def test_unknown_backend(self, min_time_problem):
        with pytest.raises(ConfigurationError, match="backend"):
            solve_trapezoid(min_time_problem, backend="snopt")

    def test_unknown_scipy_method(self, min_time_problem):
        with pytest.raises(ConfigurationError, match="method"):
            solve_trapezoid(min_time_problem, method="Nelder-Mead")


class TestEvaluationFailures:
    def test_raising_dynamics_becomes_data_integrity_error(self):
        def broken_dynamics(t, x, u):
            raise RuntimeError("model blew up")

        problem = Problem(functions=UserFunctions(dynamics=broken_dynamics), guess=_guess())

        with pytest.raises(DataIntegrityError, match="model blew up"):
            transcribe(problem)

    def test_wrongly_shaped_dynamics_becomes_data_integrity_error(self):
        problem = Problem(
            functions=UserFunctions(dynamics=lambda t, x, u: np.ones((3, 7))),
            guess=_guess(),
        )

        with pytest.raises(DataIntegrityError):
            transcribe(problem)

    def test_exception_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="trapcol"):
            ConfigurationError("Something is off")

        assert "Something is off" in caplog.text


class TestSolutionExtraction:
    def _result(self, x, success=True, status=0, message="ok"):
        return NLPResult(
            x=np.asarray(x, dtype=np.float64),
            objective=float("nan"),
            success=success,
            status=status,
            message=message,
            stats={"iter_count": 42},
        )

    def test_wrong_result_length_keeps_solver_status(self):
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        result = self._result(np.zeros(7), success=False, status=-3, message="Restoration failed")

        with pytest.raises(SolutionExtractionError, match="expected 8") as excinfo:
            Solution(result, layout, _functions(), 0.0)

        assert excinfo.value.solver_status == -3
        assert "Restoration failed" in str(excinfo.value)

    def test_diverged_result_keeps_solver_status(self, caplog):
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        result = self._result(
            np.full(8, np.nan),
            success=False,
            status="Invalid_Number_Detected",
            message="Invalid_Number_Detected",
        )

        with caplog.at_level(logging.WARNING, logger="trapcol"):
            solution = Solution(result, layout, _functions(), 0.25)

        assert not solution.success
        assert not solution.is_finite
        assert solution.status == "Invalid_Number_Detected"
        assert solution.message == "Invalid_Number_Detected"
        assert solution.diagnostics["iter_count"] == 42
        assert solution.nlp_time == 0.25
        assert solution.defects.shape == (1, 2)
        assert np.all(np.isnan(solution.defects))
        assert "Invalid_Number_Detected" in caplog.text

    def test_partly_non_finite_result_is_never_a_success(self):
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        x = np.array([0.0, 1.0, 0.0, 0.5, 1.0, np.inf, 1.0, 1.0])

        solution = Solution(self._result(x, success=True), layout, _functions(), 0.0)

        assert not solution.success
        assert solution.status == 0

    def test_interpolating_diverged_result_reports_status(self):
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        result = self._result(
            np.full(8, np.nan), success=False, status="Maximum_Iterations_Exceeded"
        )
        solution = Solution(result, layout, _functions(), 0.0)

        with pytest.raises(SolutionExtractionError, match="Maximum_Iterations_Exceeded"):
            solution.interpolate(0.5)

    def test_reversed_span_interpolates(self):
        # t0 = 2, tF = 1 with x' = u = 1: the state falls from 1 to 0 going backwards in time
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        x = np.array([2.0, 1.0, 1.0, 0.5, 0.0, 1.0, 1.0, 1.0])

        solution = Solution(self._result(x), layout, _functions(), 0.0)
        state, control = solution.interpolate([1.0, 1.25, 2.0])

        assert_allclose(state[0], [0.0, 0.25, 1.0], atol=1e-12)
        assert_allclose(control[0], [1.0, 1.0, 1.0])

    def test_reversed_span_rejects_outside_queries(self):
        layout = PackLayout(n_time=3, n_state=1, n_control=1)
        x = np.array([2.0, 1.0, 1.0, 0.5, 0.0, 1.0, 1.0, 1.0])
        solution = Solution(self._result(x), layout, _functions(), 0.0)

        with pytest.raises(ConfigurationError, match=r"\[1.0, 2.0\]"):
            solution.interpolate(2.5)


class TestExceptionFormatting:
    def test_extraction_error_lists_solver_details(self):
        error = SolutionExtractionError(
            "Bad vector", "decoding", solver_status=2, solver_message="Infeasible"
        )

        assert str(error) == (
            "Bad vector (Context: decoding; solver status: 2; solver message: Infeasible)"
        )

    def test_message_without_details(self):
        error = SolutionExtractionError("Bad vector")

        assert str(error) == "Bad vector"
        assert error.solver_status is None
