import numpy as np

from ..problem import Bound, Bounds
from ..tc_types import BoundInput, FloatArray
from .packing import PackLayout, pack_decision_vector


def _broadcast_bound(value: BoundInput, size: int, fill: float) -> FloatArray:
    if value is None:
        return np.full(size, fill, dtype=np.float64)
    return np.broadcast_to(np.asarray(value, dtype=np.float64).ravel(), (size,)).copy()


def _time_bound_grid(initial: BoundInput, final: BoundInput, n_time: int, fill: float) -> FloatArray:
    t_initial = fill if initial is None else float(initial)
    t_final = fill if final is None else float(final)

    # Interior values of an infinite span are NaN; packing keeps only the endpoints.
    with np.errstate(invalid="ignore"):
        time_grid = np.linspace(t_initial, t_final, n_time)
    time_grid[0] = t_initial
    time_grid[-1] = t_final
    return time_grid


def _state_bound_grid(
    initial: BoundInput, interior: BoundInput, final: BoundInput, layout: PackLayout, fill: float
) -> FloatArray:
    grid = np.repeat(
        _broadcast_bound(interior, layout.n_state, fill)[:, np.newaxis], layout.n_time, axis=1
    )
    grid[:, 0] = _broadcast_bound(initial, layout.n_state, fill)
    grid[:, -1] = _broadcast_bound(final, layout.n_state, fill)
    return grid


def _control_bound_grid(bound: BoundInput, layout: PackLayout, fill: float) -> FloatArray:
    return np.repeat(
        _broadcast_bound(bound, layout.n_control, fill)[:, np.newaxis], layout.n_time, axis=1
    )


def _expand_side(bounds: Bounds, layout: PackLayout, side: str, fill: float) -> FloatArray:
    def pick(bound: Bound) -> BoundInput:
        return getattr(bound, side)

    time_grid = _time_bound_grid(
        pick(bounds.initial_time), pick(bounds.final_time), layout.n_time, fill
    )
    state_grid = _state_bound_grid(
        pick(bounds.initial_state), pick(bounds.state), pick(bounds.final_state), layout, fill
    )
    control_grid = _control_bound_grid(pick(bounds.control), layout, fill)

    vector, _ = pack_decision_vector(time_grid, state_grid, control_grid)
    return vector


def expand_bounds(bounds: Bounds, layout: PackLayout) -> tuple[FloatArray, FloatArray]:
    """
    Expand per-channel bounds into lower and upper decision vectors.

    Time bounds are interpolated linearly from the initial-time bound to the
    final-time bound across the grid. The initial and final state bounds apply
    to the first and last node, the generic state bound to every interior node
    and the control bound to every node. None means unbounded.

    Returns:
        (low, upp), both laid out like the decision vector
    """
    low = _expand_side(bounds, layout, "low", -np.inf)
    upp = _expand_side(bounds, layout, "upp", np.inf)
    return low, upp
