# trapcol/transcription/packing.py
"""
Decision vector codec.

The NLP sees one flat vector laid out as::

    [t0, tF, state(:, 0), state(:, 1), ..., control(:, 0), control(:, 1), ...]

i.e. the two time endpoints followed by the column-major flattening of the
(n_state, n_time) state matrix and the (n_control, n_time) control matrix.
"""

from dataclasses import dataclass

import numpy as np

from ..tc_types import FloatArray


@dataclass(frozen=True)
class PackLayout:
    """Shape metadata needed to turn a decision vector back into a trajectory."""

    n_time: int
    n_state: int
    n_control: int

    @property
    def n_state_entries(self) -> int:
        return self.n_state * self.n_time

    @property
    def n_control_entries(self) -> int:
        return self.n_control * self.n_time

    @property
    def n_decision(self) -> int:
        """Length of the decision vector: 2 + n_time*(n_state+n_control)."""
        return 2 + self.n_state_entries + self.n_control_entries

    @property
    def n_defects(self) -> int:
        """Number of trapezoidal defect rows: n_state*(n_time-1)."""
        return self.n_state * (self.n_time - 1)


def pack_decision_vector(
    time: FloatArray, state: FloatArray, control: FloatArray
) -> tuple[FloatArray, PackLayout]:
    """
    Collapse a gridded trajectory into a single decision vector.

    Only the first and last time values are kept; the transcription assumes a
    uniform grid and regenerates the interior nodes on unpacking.

    Args:
        time: Grid times, shape (n_time,)
        state: State at each grid point, shape (n_state, n_time)
        control: Control at each grid point, shape (n_control, n_time)

    Returns:
        Decision vector of length 2 + n_time*(n_state+n_control) and its layout
    """
    time = np.asarray(time, dtype=np.float64)
    state = np.asarray(state, dtype=np.float64)
    control = np.asarray(control, dtype=np.float64)

    layout = PackLayout(n_time=time.size, n_state=state.shape[0], n_control=control.shape[0])

    decision_vector = np.concatenate(
        [
            [time[0], time[-1]],
            state.reshape(layout.n_state_entries, order="F"),
            control.reshape(layout.n_control_entries, order="F"),
        ]
    )
    return decision_vector, layout


def unpack_decision_vector(
    decision_vector: FloatArray, layout: PackLayout
) -> tuple[FloatArray, FloatArray, FloatArray]:
    """
    Split a decision vector into time, state and control arrays.

    Args:
        decision_vector: Flat vector produced by pack_decision_vector (or the NLP)
        layout: Layout returned when the vector was packed

    Returns:
        time (n_time,), state (n_state, n_time), control (n_control, n_time)
    """
    z = np.asarray(decision_vector, dtype=np.float64)
    state_end = 2 + layout.n_state_entries
    control_end = state_end + layout.n_control_entries

    time = np.linspace(z[0], z[1], layout.n_time)
    state = z[2:state_end].reshape((layout.n_state, layout.n_time), order="F")
    control = z[state_end:control_end].reshape((layout.n_control, layout.n_time), order="F")

    return time, state, control
