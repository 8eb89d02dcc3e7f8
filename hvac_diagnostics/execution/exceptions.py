"""
Execution Layer Exceptions

Errors raised by the transition functions and the DiagnosticEngine.
"""

from typing import Sequence


class DiagnosticError(Exception):
    """Base class for diagnostic engine errors."""
    pass


class InvalidAnswerError(DiagnosticError):
    """
    Raised when a choice does not match exactly one option of the current step.
    The session is left untouched; callers should re-prompt the same step.
    """

    def __init__(self, position: int, choice: str, options: Sequence[str], reason: str):
        self.position = position
        self.choice = choice
        self.options = tuple(options)
        self.reason = reason
        super().__init__(
            f"Invalid answer {choice!r} at step {position} ({reason}). "
            f"Valid options: {list(self.options)}"
        )


class UnknownFlowError(DiagnosticError):
    """Raised when a flow key is not part of the registry."""
    pass


class SessionTerminatedError(DiagnosticError):
    """Raised when an operation is attempted on a finished session."""
    pass
