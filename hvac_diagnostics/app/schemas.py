"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class StartDiagnosticRequest(BaseModel):
    symptom: Optional[str] = None


class ToolCallRequest(BaseModel):
    """Function call forwarded by the chat assistant."""
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class AnswerRequest(BaseModel):
    choice: str


class StepRead(BaseModel):
    position: int
    prompt: str
    options: List[str]


class RecommendationRead(BaseModel):
    text: str
    category: str


class DiagnosticResponse(BaseModel):
    session_id: str
    flow_key: str
    status: str
    step: Optional[StepRead] = None
    recommendation: Optional[RecommendationRead] = None
    message: Optional[str] = None
    booking_label: Optional[str] = None


class FlowRead(BaseModel):
    key: str
    title: str
    total_steps: int


class InvalidAnswerDetail(BaseModel):
    message: str
    position: int
    choice: str
    options: List[str]
