"""
Domain Layer - Static Data Models

Defines the core domain model representing the static structure of the
diagnostic decision trees: Flows, Steps and their transition tables.
"""

from hvac_diagnostics.domain.models import (
    Category,
    Flow,
    FlowKey,
    Goto,
    Recommendation,
    Step,
    Terminate,
    TerminalOverride,
    Transition,
)

__all__ = [
    "Category",
    "Flow",
    "FlowKey",
    "Goto",
    "Recommendation",
    "Step",
    "Terminate",
    "TerminalOverride",
    "Transition",
]
