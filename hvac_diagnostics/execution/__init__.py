"""
Execution Layer - Flow Transitions and Session Orchestration

Defines the pure transition functions and the DiagnosticEngine
(deterministic state machine) that together run diagnostic sessions.
"""

from hvac_diagnostics.execution.engine import CompletionSink, DiagnosticEngine
from hvac_diagnostics.execution.exceptions import (
    DiagnosticError,
    InvalidAnswerError,
    SessionTerminatedError,
    UnknownFlowError,
)
from hvac_diagnostics.execution.transitions import (
    advance,
    match_option,
    resolve_recommendation,
)


__all__ = [
    "CompletionSink",
    "DiagnosticEngine",
    "DiagnosticError",
    "InvalidAnswerError",
    "SessionTerminatedError",
    "UnknownFlowError",
    "advance",
    "match_option",
    "resolve_recommendation",
]
