import numpy as np
import pytest

from trapcol import Bound, Bounds, Guess, Problem, UserFunctions


def _integrator_dynamics(t, x, u):
    return u


@pytest.fixture
def min_time_problem():
    """Single integrator moved from 0 to 1 in minimum time with |u| <= 1."""
    return Problem(
        functions=UserFunctions(
            dynamics=_integrator_dynamics,
            boundary_objective=lambda t0, x0, tf, xf: tf,
        ),
        guess=Guess(time=[0.0, 2.0], state=[0.0, 1.0], control=[0.5, 0.5]),
        bounds=Bounds(
            initial_time=Bound(0.0, 0.0),
            final_time=Bound(0.0, 10.0),
            initial_state=Bound(0.0, 0.0),
            final_state=Bound(1.0, 1.0),
            control=Bound(-1.0, 1.0),
        ),
        n_grid=3,
        name="Minimum Time Integrator",
    )


@pytest.fixture
def min_energy_problem():
    """Single integrator moved from 0 to 1 in unit time minimizing the integral of u^2."""
    return Problem(
        functions=UserFunctions(
            dynamics=_integrator_dynamics,
            path_objective=lambda t, x, u: u[0] ** 2,
        ),
        guess=Guess(time=[0.0, 1.0], state=[0.0, 0.5], control=[0.0, 0.0]),
        bounds=Bounds(
            initial_time=Bound(0.0, 0.0),
            final_time=Bound(1.0, 1.0),
            initial_state=Bound(0.0, 0.0),
            state=Bound(-5.0, 5.0),
            final_state=Bound(1.0, 1.0),
            control=Bound(-10.0, 10.0),
        ),
        n_grid=11,
        name="Minimum Energy Integrator",
    )


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
