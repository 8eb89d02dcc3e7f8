"""
Execution Schemas - Transition Result Types
"""

from hvac_diagnostics.execution.schemas.state_machine import (
    StateMachineTransition,
    StepOutcome,
)

__all__ = [
    "StateMachineTransition",
    "StepOutcome",
]
