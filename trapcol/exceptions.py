import logging
from typing import Any


# Library logger - no configuration, user controls output
logger = logging.getLogger(__name__)


class TrapcolBaseError(Exception):
    """
    Base class for all trapcol-specific errors.

    Catch this to handle any error raised by trapcol itself. Errors raised by
    user functions or by numpy/scipy during transcription are not rewrapped
    unless noted.

    Args:
        message: What went wrong
        context: Where it went wrong, e.g. the validation step or solver call
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context
        super().__init__(str(self))
        logger.debug("%s raised: %s", type(self).__name__, self)

    def details(self) -> list[str]:
        """Extra fragments appended to the message; subclasses extend this."""
        return [f"Context: {self.context}"] if self.context else []

    def __str__(self) -> str:
        details = self.details()
        if not details:
            return self.message
        return f"{self.message} ({'; '.join(details)})"


class ConfigurationError(TrapcolBaseError):
    """
    Raised when a problem or solver call is configured inconsistently.

    Examples:
        - Grid with fewer than two points
        - Guess time values that are not strictly increasing
        - Bound vectors whose size does not match the state or control count
        - Lower bound above upper bound
        - Unknown NLP backend
    """


class DataIntegrityError(TrapcolBaseError):
    """
    Raised when the NLP cannot be assembled from the problem data.

    This typically wraps an exception raised by a user function while the
    constraint layout is being measured at the initial point.
    """


class SolutionExtractionError(TrapcolBaseError):
    """
    Raised when the solver's result cannot be decoded into a trajectory.

    The solver's own exit status and message travel with the error so a
    failed decode never hides why the solver stopped.

    Args:
        message: What went wrong
        context: Where it went wrong
        solver_status: Exit status reported by the NLP backend
        solver_message: Status message reported by the NLP backend
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
        solver_status: Any = None,
        solver_message: str | None = None,
    ) -> None:
        self.solver_status = solver_status
        self.solver_message = solver_message
        super().__init__(message, context)

    def details(self) -> list[str]:
        details = super().details()
        if self.solver_status is not None:
            details.append(f"solver status: {self.solver_status}")
        if self.solver_message:
            details.append(f"solver message: {self.solver_message}")
        return details
