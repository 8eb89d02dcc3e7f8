import logging
from typing import List

from fastapi import FastAPI, HTTPException, Depends, status
from fastapi.responses import Response

from ..config import settings
from ..execution.exceptions import InvalidAnswerError, SessionTerminatedError
from ..repositories.flow import FlowRepository
from ..services.diagnostic import DiagnosticService, TurnResult
from ..services.exceptions import SessionNotFoundError, UnsupportedToolCallError
from .dependencies import get_diagnostic_service, get_flow_repository
from .schemas import (
    AnswerRequest,
    DiagnosticResponse,
    FlowRead,
    InvalidAnswerDetail,
    RecommendationRead,
    StartDiagnosticRequest,
    StepRead,
    ToolCallRequest,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.APP_TITLE)


def _to_response(turn: TurnResult) -> DiagnosticResponse:
    # Explicitly Map: TurnResult (Service) -> DiagnosticResponse (API)
    return DiagnosticResponse(
        session_id=turn.session_id,
        flow_key=turn.flow_key,
        status=turn.status,
        step=StepRead(**turn.step.model_dump()) if turn.step else None,
        recommendation=(
            RecommendationRead(
                text=turn.recommendation.text,
                category=turn.recommendation.category.value,
            )
            if turn.recommendation
            else None
        ),
        message=turn.message,
        booking_label=turn.booking_label,
    )

# --- Endpoints ---

@app.get("/flows", response_model=List[FlowRead])
def list_flows(
    repository: FlowRepository = Depends(get_flow_repository)
):
    """Lists the built-in diagnostic flows."""
    return [
        FlowRead(key=flow.key.value, title=flow.title, total_steps=len(flow.steps))
        for flow in repository.list_flows()
    ]


@app.post(
    "/diagnostics",
    response_model=DiagnosticResponse,
    status_code=status.HTTP_201_CREATED
)
def start_diagnostic(
    request: StartDiagnosticRequest,
    service: DiagnosticService = Depends(get_diagnostic_service)
):
    """Starts a diagnostic session from an optional symptom description."""
    return _to_response(service.start_diagnostic(request.symptom))


@app.post(
    "/diagnostics/tool-call",
    response_model=DiagnosticResponse,
    status_code=status.HTTP_201_CREATED
)
def start_from_tool_call(
    request: ToolCallRequest,
    service: DiagnosticService = Depends(get_diagnostic_service)
):
    """Starts a diagnostic session from the assistant's startDiagnostic call."""
    try:
        return _to_response(service.start_from_tool_call(request.name, request.args))
    except UnsupportedToolCallError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/diagnostics/{session_id}", response_model=DiagnosticResponse)
def get_diagnostic(
    session_id: str,
    service: DiagnosticService = Depends(get_diagnostic_service)
):
    """Returns the step the session is waiting on."""
    try:
        return _to_response(service.get_current(session_id))
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/diagnostics/{session_id}/answers", response_model=DiagnosticResponse)
def submit_answer(
    session_id: str,
    answer: AnswerRequest,
    service: DiagnosticService = Depends(get_diagnostic_service)
):
    try:
        return _to_response(service.submit_answer(session_id, answer.choice))

    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionTerminatedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidAnswerError as e:
        # The client should re-prompt the same step with these options
        detail = InvalidAnswerDetail(
            message=str(e),
            position=e.position,
            choice=e.choice,
            options=list(e.options),
        )
        raise HTTPException(status_code=422, detail=detail.model_dump())


@app.delete("/diagnostics/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def abandon_diagnostic(
    session_id: str,
    service: DiagnosticService = Depends(get_diagnostic_service)
):
    """
    Discards a session. Returns 204 No Content on success.
    """
    if not service.abandon(session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)
