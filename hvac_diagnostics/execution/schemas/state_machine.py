"""
Transition Types - FSM State Transition Definitions

Type definitions for the result of applying one answer to a flow.
Produced by the pure transition functions and consumed by the engine.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

from ...domain.models import Recommendation


class StateMachineTransition(Enum):
    """
    What happened to the session pointer after an answer.
    """

    ADVANCE = auto()  # The pointer moved to the next linear or branched step.
    EXIT = auto()  # A terminal transition was taken; the flow is finished.


@dataclass(frozen=True)
class StepOutcome:
    """
    Result of advancing a flow by one answer.

    Exactly one of `next_position` (ADVANCE) and `recommendation` (EXIT) is set.
    `answers` is the new answer history including the answer just given.
    """

    transition_type: StateMachineTransition
    answer: str
    answers: Dict[int, str] = field(default_factory=dict)
    next_position: Optional[int] = None
    recommendation: Optional[Recommendation] = None
