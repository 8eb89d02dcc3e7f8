"""
Diagnostic Service - Application Orchestration Layer

This service is the entry point used by the chat assistant, the standalone
diagnostic widget and the HTTP API. It orchestrates the interaction between the
session store and the DiagnosticEngine, and turns a finished run into the
"Diagnostic Complete" message plus a booking suggestion.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ..config import settings
from ..domain.models import Category, Recommendation, Step
from ..execution.engine import CompletionSink, DiagnosticEngine
from ..repositories.session import SessionRepository
from ..state.models import DiagnosticSession
from .exceptions import SessionNotFoundError, UnsupportedToolCallError

logger = logging.getLogger(__name__)

START_DIAGNOSTIC_TOOL = "startDiagnostic"


class StepView(BaseModel):
    """What the rendering layer needs to draw the current question."""
    position: int
    prompt: str
    options: List[str]


class TurnResult(BaseModel):
    session_id: str
    flow_key: str
    status: str
    step: Optional[StepView] = None
    recommendation: Optional[Recommendation] = None
    message: Optional[str] = None
    booking_label: Optional[str] = None


def format_completion_message(text: str, category: Category) -> str:
    """Chat message shown when a diagnostic run finishes."""
    message = f"Diagnostic Complete: {text}"
    if category == Category.EMERGENCY_REPAIR:
        message += (
            f" Emergency service is available 24/7 at {settings.COMPANY_PHONE}."
        )
    return message


class DiagnosticService:
    def __init__(self, session_repository: SessionRepository, engine: DiagnosticEngine):
        self.session_repo = session_repository
        self.engine = engine

    def start_diagnostic(self, symptom: Optional[str] = None) -> TurnResult:
        """Routes the symptom to a flow and stores the new session."""
        session = self.engine.start(symptom)
        self.session_repo.save(session)
        return self._in_progress(session)

    def start_from_tool_call(self, name: str, args: Optional[Dict[str, Any]]) -> TurnResult:
        """
        Handles the assistant's function call. The `symptom` argument is
        treated exactly like a hint typed by the user.
        """
        if name != START_DIAGNOSTIC_TOOL:
            raise UnsupportedToolCallError(f"Unsupported tool call '{name}'")
        symptom = (args or {}).get("symptom")
        logger.info(f"Assistant requested a diagnostic for symptom {symptom!r}")
        return self.start_diagnostic(symptom if isinstance(symptom, str) else None)

    def get_current(self, session_id: str) -> TurnResult:
        return self._in_progress(self._load(session_id))

    def submit_answer(
        self,
        session_id: str,
        choice: str,
        on_complete: Optional[CompletionSink] = None,
    ) -> TurnResult:
        """
        The Core Loop:
        1. Load Session
        2. Apply the answer through the Engine
        3. Save (still active) or discard (finished) the session
        4. Return the next step or the completion payload
        """
        session = self._load(session_id)

        result = self.engine.answer(session, choice, on_complete=on_complete)

        if isinstance(result, DiagnosticSession):
            self.session_repo.save(result)
            return self._in_progress(result)

        # Finished sessions are not kept around
        self.session_repo.delete(session_id)
        return TurnResult(
            session_id=session.session_id,
            flow_key=session.flow_key.value,
            status="COMPLETED",
            recommendation=result,
            message=format_completion_message(result.text, result.category),
            booking_label=f"Book {result.category.value}",
        )

    def abandon(self, session_id: str) -> bool:
        """Drops a session the user walked away from."""
        return self.session_repo.delete(session_id)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _load(self, session_id: str) -> DiagnosticSession:
        session = self.session_repo.get(session_id)
        if not session:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    def _in_progress(self, session: DiagnosticSession) -> TurnResult:
        step: Step = self.engine.current_step(session)
        return TurnResult(
            session_id=session.session_id,
            flow_key=session.flow_key.value,
            status="IN_PROGRESS",
            step=StepView(
                position=session.current_position,
                prompt=step.prompt,
                options=list(step.options),
            ),
        )
