"""
State Layer - Runtime Data Models

Defines the runtime state model that tracks a user's progress through a
diagnostic flow.
"""

from hvac_diagnostics.state.models import (
    DiagnosticSession,
    SessionStatus,
)

__all__ = [
    "DiagnosticSession",
    "SessionStatus",
]
