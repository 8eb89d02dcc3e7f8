"""
Domain Layer - Static Data Models

This module defines the core domain model representing the static structure
of the diagnostic decision trees. Flows, Steps and their transition tables are
frozen dataclasses: they are built once at import time and shared read-only by
every session.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class Category(str, Enum):
    """
    Service category a Recommendation points to.

    Closed set shared with the booking side of the application. The engine
    never produces a category outside of this enum.
    """
    EMERGENCY_REPAIR = "Emergency Repair"
    SCHEDULED_REPAIR = "Scheduled Repair"
    MAINTENANCE = "Preventive Maintenance"
    NEW_INSTALLATION = "New Installation / Replacement"
    QUOTE_REQUEST = "Quote Request"
    AIR_QUALITY = "Indoor Air Quality"
    COMMERCIAL = "Commercial HVAC"


class FlowKey(str, Enum):
    """Identifies one of the built-in decision trees."""
    COOLING_FAILURE = "cooling-failure"
    HEATING_FAILURE = "heating-failure"
    ABNORMAL_NOISE = "abnormal-noise"
    WATER_LEAK = "water-leak"
    GENERIC_FALLBACK = "generic-fallback"


@dataclass(frozen=True)
class Recommendation:
    """
    Terminal output of a diagnostic session.

    Attributes:
        text: Advice shown to the user.
        category: Suggested service category (used to pre-fill booking).
    """
    text: str
    category: Category


@dataclass(frozen=True)
class Goto:
    """Transition to another step of the same flow."""
    target: int


@dataclass(frozen=True)
class Terminate:
    """
    Transition that finishes the flow.

    Attributes:
        resolver: Name of a resolver registered in the resolver table. None
            means the flow's override table and default recommendation apply.
    """
    resolver: Optional[str] = None


Transition = Union[Goto, Terminate]


@dataclass(frozen=True)
class Step:
    """
    A single multiple-choice question within a flow.

    `transitions` is aligned with `options`: the transition taken when the
    user picks options[i] is transitions[i].

    Attributes:
        prompt: Question text shown to the user.
        options: Ordered answer labels offered by the UI.
        transitions: Goto/Terminate entry for each option.
    """
    prompt: str
    options: Tuple[str, ...]
    transitions: Tuple[Transition, ...]

    def __post_init__(self):
        if not self.options:
            raise ValueError(f"Step '{self.prompt}' has no options.")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Step '{self.prompt}' has duplicate options.")
        if len(self.transitions) != len(self.options):
            raise ValueError(
                f"Step '{self.prompt}' defines {len(self.transitions)} transitions "
                f"for {len(self.options)} options."
            )

    def transition(self, option_index: int) -> Transition:
        return self.transitions[option_index]

    @property
    def can_terminate(self) -> bool:
        return any(isinstance(t, Terminate) for t in self.transitions)


@dataclass(frozen=True)
class TerminalOverride:
    """
    Flow-local exception to the default recommendation.

    Consulted only when a Terminate transition has no resolver. If the
    terminating answer starts with `answer_prefix`, `recommendation` is used
    instead of the flow default.
    """
    answer_prefix: str
    recommendation: Recommendation


@dataclass(frozen=True)
class Flow:
    """
    Decision tree for one symptom category.

    Steps are addressed by position; position 0 is the entry point. The step
    graph must be acyclic, which is checked on construction.

    Attributes:
        key: Flow identifier.
        title: Human-readable title.
        steps: Question nodes, in position order.
        default_recommendation: Used when a terminal transition has neither a
            resolver nor a matching override.
        overrides: Flow-local override table (see TerminalOverride).
    """
    key: FlowKey
    title: str
    steps: Tuple[Step, ...]
    default_recommendation: Recommendation
    overrides: Tuple[TerminalOverride, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.steps:
            raise ValueError(f"Flow '{self.key.value}' has no steps.")
        for position, step in enumerate(self.steps):
            for transition in step.transitions:
                if not isinstance(transition, Goto):
                    continue
                if not 0 <= transition.target < len(self.steps):
                    raise ValueError(
                        f"Flow '{self.key.value}' step {position} points to "
                        f"missing step {transition.target}."
                    )
                if transition.target == position:
                    raise ValueError(
                        f"Flow '{self.key.value}' step {position} points to itself."
                    )
        # Raises on cycles
        self.longest_path()

    def longest_path(self) -> int:
        """
        Returns the largest number of answers needed to reach a terminal
        transition, over every path starting at position 0.
        """
        depths: Dict[int, int] = {}
        visiting = set()

        def depth(position: int) -> int:
            if position in depths:
                return depths[position]
            if position in visiting:
                raise ValueError(
                    f"Flow '{self.key.value}' has a cycle through step {position}."
                )
            visiting.add(position)
            best = 0
            for transition in self.steps[position].transitions:
                if isinstance(transition, Goto):
                    best = max(best, depth(transition.target))
            visiting.discard(position)
            depths[position] = best + 1
            return depths[position]

        return depth(0)

    def terminal_resolvers(self) -> Tuple[str, ...]:
        """Names of every resolver referenced by this flow."""
        return tuple(
            transition.resolver
            for step in self.steps
            for transition in step.transitions
            if isinstance(transition, Terminate) and transition.resolver
        )
