import logging

from ..exceptions import ConfigurationError
from ..tc_types import NLPResult
from ..transcription import TranscribedNLP
from ..utils.constants import (
    DEFAULT_BACKEND,
    DEFAULT_IPOPT_OPTIONS,
    DEFAULT_SCIPY_METHOD,
    DEFAULT_SCIPY_OPTIONS,
    DEFAULT_TRUST_CONSTR_OPTIONS,
)
from .ipopt_backend import solve_with_ipopt
from .scipy_backend import solve_with_scipy


logger = logging.getLogger(__name__)


def default_nlp_options(backend: str, method: str | None = None) -> dict[str, object]:
    """Default options for a backend/method pair (copied, safe to modify)."""
    if backend == "ipopt":
        return dict(DEFAULT_IPOPT_OPTIONS)
    if (method or DEFAULT_SCIPY_METHOD) == "trust-constr":
        return dict(DEFAULT_TRUST_CONSTR_OPTIONS)
    return dict(DEFAULT_SCIPY_OPTIONS)


def solve_nlp(
    nlp: TranscribedNLP,
    backend: str = DEFAULT_BACKEND,
    method: str | None = None,
    options: dict[str, object] | None = None,
) -> NLPResult:
    """
    Hand a transcribed NLP to the selected backend.

    Options are opaque to trapcol; when given they replace the backend defaults.
    """
    solver_options = options if options is not None else default_nlp_options(backend, method)

    if backend == "scipy":
        return solve_with_scipy(nlp, method or DEFAULT_SCIPY_METHOD, solver_options)
    if backend == "ipopt":
        return solve_with_ipopt(nlp, solver_options)

    raise ConfigurationError(f"Unknown NLP backend '{backend}'")
