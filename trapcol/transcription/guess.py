import numpy as np
from scipy.interpolate import interp1d

from ..problem import Guess
from ..tc_types import FloatArray


def interpolate_guess(guess: Guess, n_grid: int) -> tuple[FloatArray, FloatArray, FloatArray]:
    """
    Resample a guess trajectory onto the uniform transcription grid.

    The new grid spans the guess's own first and last time. State and control
    are interpolated linearly, channel by channel. The resample always runs,
    even when the guess already has n_grid points.
    """
    time = np.linspace(guess.time[0], guess.time[-1], n_grid)

    state = interp1d(guess.time, guess.state, kind="linear", axis=1)(time)
    if guess.n_control == 0:
        control = np.zeros((0, n_grid))
    else:
        control = interp1d(guess.time, guess.control, kind="linear", axis=1)(time)

    return time, state, control
