"""NLP backends wired to the transcription callbacks."""

from .solver_interface import default_nlp_options, solve_nlp


__all__ = [
    "default_nlp_options",
    "solve_nlp",
]
