"""
Step Transitions.

Pure functions that apply one answer to a flow: option matching, the
(step, option) -> Goto | Terminate lookup, and recommendation resolution for
terminal transitions. Nothing here mutates a session; the engine applies the
returned StepOutcome.
"""

import logging
from typing import Mapping, Optional

from ..data.resolvers import RESOLVERS, Resolver
from ..domain.models import Flow, Goto, Recommendation, Step, Terminate
from .exceptions import InvalidAnswerError
from .schemas.state_machine import StateMachineTransition, StepOutcome

logger = logging.getLogger(__name__)


def match_option(step: Step, choice: str, position: int = 0) -> int:
    """
    Returns the index of the option selected by `choice`.

    An exact match wins. Otherwise the choice must be the prefix of exactly one
    option ("Yes" selects "Yes, it's set correctly"). Empty, unmatched and
    ambiguous choices raise InvalidAnswerError.
    """
    candidate = (choice or "").strip()
    if not candidate:
        raise InvalidAnswerError(position, choice, step.options, "empty answer")

    if candidate in step.options:
        return step.options.index(candidate)

    prefixed = [i for i, option in enumerate(step.options) if option.startswith(candidate)]
    if len(prefixed) == 1:
        return prefixed[0]
    if len(prefixed) > 1:
        raise InvalidAnswerError(position, choice, step.options, "ambiguous answer")
    raise InvalidAnswerError(position, choice, step.options, "no matching option")


def resolve_recommendation(
    flow: Flow,
    terminal: Terminate,
    answers: Mapping[int, str],
    final_answer: str,
    resolvers: Mapping[str, Resolver] = RESOLVERS,
) -> Recommendation:
    """
    Determines the Recommendation for a terminal transition.

    Lookup order:
    1. The resolver named by the transition, applied to the full history.
    2. The flow's override table, keyed by the prefix of the final answer.
    3. The flow's default recommendation.
    """
    if terminal.resolver is not None:
        return resolvers[terminal.resolver](answers)

    override = next(
        (o for o in flow.overrides if final_answer.startswith(o.answer_prefix)),
        None,
    )
    if override is not None:
        logger.debug(
            f"Flow '{flow.key.value}' override '{override.answer_prefix}' applied."
        )
        return override.recommendation

    return flow.default_recommendation


def advance(
    flow: Flow,
    position: int,
    answers: Mapping[int, str],
    choice: str,
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> StepOutcome:
    """
    Applies `choice` to the step at `position` and returns the outcome.

    The returned answer history is a new dict; `answers` is never modified.
    """
    step = flow.steps[position]
    option_index = match_option(step, choice, position)
    answer = step.options[option_index]

    new_answers = dict(answers)
    new_answers[position] = answer

    transition = step.transition(option_index)

    if isinstance(transition, Goto):
        logger.debug(
            f"Flow '{flow.key.value}': step {position} -> step {transition.target} "
            f"on '{answer}'"
        )
        return StepOutcome(
            transition_type=StateMachineTransition.ADVANCE,
            answer=answer,
            answers=new_answers,
            next_position=transition.target,
        )

    recommendation = resolve_recommendation(
        flow,
        transition,
        new_answers,
        answer,
        resolvers if resolvers is not None else RESOLVERS,
    )
    logger.debug(
        f"Flow '{flow.key.value}': step {position} terminated on '{answer}' "
        f"({recommendation.category.value})"
    )
    return StepOutcome(
        transition_type=StateMachineTransition.EXIT,
        answer=answer,
        answers=new_answers,
        recommendation=recommendation,
    )
