"""
HVAC Diagnostics

Symptom-driven troubleshooting engine for an HVAC service company. A symptom
hint selects one of a fixed set of decision trees; answering its questions
produces a Recommendation (advice text plus a service category).
"""

from hvac_diagnostics.domain import (
    Category,
    Flow,
    FlowKey,
    Goto,
    Recommendation,
    Step,
    Terminate,
    TerminalOverride,
)
from hvac_diagnostics.state import (
    DiagnosticSession,
    SessionStatus,
)
from hvac_diagnostics.execution import (
    DiagnosticEngine,
    DiagnosticError,
    InvalidAnswerError,
    SessionTerminatedError,
    UnknownFlowError,
)

__all__ = [
    # Domain Layer
    "Category",
    "Flow",
    "FlowKey",
    "Goto",
    "Recommendation",
    "Step",
    "Terminate",
    "TerminalOverride",
    # State Layer
    "DiagnosticSession",
    "SessionStatus",
    # Execution Layer
    "DiagnosticEngine",
    "DiagnosticError",
    "InvalidAnswerError",
    "SessionTerminatedError",
    "UnknownFlowError",
]
