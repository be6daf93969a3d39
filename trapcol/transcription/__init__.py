from .bounds import expand_bounds
from .constraints import compute_defects, evaluate_constraints
from .core import TranscribedNLP, transcribe
from .guess import interpolate_guess
from .objective import evaluate_objective, trapezoid_quadrature
from .packing import PackLayout, pack_decision_vector, unpack_decision_vector


__all__ = [
    "PackLayout",
    "TranscribedNLP",
    "compute_defects",
    "evaluate_constraints",
    "evaluate_objective",
    "expand_bounds",
    "interpolate_guess",
    "pack_decision_vector",
    "transcribe",
    "trapezoid_quadrature",
    "unpack_decision_vector",
]
