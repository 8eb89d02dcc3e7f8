"""
Engine - Diagnostic Session Orchestration

The DiagnosticEngine is the deterministic state machine that owns a session's
lifecycle: it selects a flow when the session starts, exposes the step to
render, and applies answers until a Recommendation comes out.
-----------------------------------------------

Session states:
1. ACTIVE(position): waiting for an answer. `answer` either moves the pointer
    (Transition=ADVANCE) and returns the session, or finishes the flow
    (Transition=EXIT) and returns the Recommendation.
2. TERMINATED: absorbing. Every further operation raises
    SessionTerminatedError; the caller is expected to discard the session.

The engine performs no I/O. Flow definitions are shared read-only, and all
mutable state lives on the DiagnosticSession passed in by the caller.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from ..domain.models import Category, Flow, FlowKey, Recommendation, Step
from ..repositories.flow import FlowRepository
from ..services.flow_router import FlowRouter, KeywordFlowRouter
from ..state.models import DiagnosticSession, SessionStatus
from .exceptions import InvalidAnswerError, SessionTerminatedError
from .schemas.state_machine import StateMachineTransition, StepOutcome
from .transitions import advance

logger = logging.getLogger(__name__)

# Receives (recommendation text, category) once, when a session finishes.
CompletionSink = Callable[[str, Category], None]


class DiagnosticEngine:
    def __init__(self, repository: FlowRepository, router: Optional[FlowRouter] = None):
        self.repository = repository
        self.router = router or KeywordFlowRouter()

    def start(self, hint: Optional[str] = None) -> DiagnosticSession:
        """
        Selects a flow for the symptom hint and opens a session at step 0.
        """
        return self.start_flow(self.router.find_flow(hint))

    def start_flow(self, flow_key: Union[FlowKey, str]) -> DiagnosticSession:
        """
        Opens a session on an explicit flow, bypassing the router.
        Raises UnknownFlowError for keys outside the registry.
        """
        flow = self.repository.get_flow(flow_key)
        session = DiagnosticSession(flow_key=flow.key)
        logger.info(f"Session {session.session_id} started on flow '{flow.key.value}'")
        return session

    def current_step(self, session: DiagnosticSession) -> Step:
        self._ensure_active(session)
        flow = self.repository.get_flow(session.flow_key)
        return flow.steps[session.current_position]

    def answer(
        self,
        session: DiagnosticSession,
        choice: str,
        on_complete: Optional[CompletionSink] = None,
    ) -> Union[DiagnosticSession, Recommendation]:
        """
        Applies one answer to the session.

        Returns the (updated) session while the flow continues, or the final
        Recommendation once it terminates. On an invalid answer the session is
        left exactly as it was and InvalidAnswerError propagates.
        """
        self._ensure_active(session)
        flow = self.repository.get_flow(session.flow_key)

        try:
            outcome = advance(flow, session.current_position, session.answers, choice)
        except InvalidAnswerError as e:
            logger.warning(f"Session {session.session_id}: {e}")
            raise

        return self._apply_outcome(session, flow, outcome, on_complete)

    # ==========================================================================
    # State Mutation
    # ==========================================================================

    def _apply_outcome(
        self,
        session: DiagnosticSession,
        flow: Flow,
        outcome: StepOutcome,
        on_complete: Optional[CompletionSink],
    ) -> Union[DiagnosticSession, Recommendation]:
        session.answers = outcome.answers
        session.updated_at = datetime.utcnow()

        if outcome.transition_type == StateMachineTransition.ADVANCE:
            session.current_position = outcome.next_position
            return session

        recommendation = outcome.recommendation
        session.status = SessionStatus.TERMINATED
        session.recommendation = recommendation
        logger.info(
            f"Session {session.session_id} finished flow '{flow.key.value}' "
            f"after {len(session.answers)} answers: {recommendation.category.value}"
        )

        if on_complete is not None:
            on_complete(recommendation.text, recommendation.category)
        return recommendation

    def _ensure_active(self, session: DiagnosticSession):
        if session.status == SessionStatus.TERMINATED:
            raise SessionTerminatedError(
                f"Session {session.session_id} has already finished."
            )
