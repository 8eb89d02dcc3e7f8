"""
State Layer - Runtime Data Models

This module defines the runtime state of a single diagnostic run: which flow
was selected, where the user currently is, and the answers given so far.
Sessions are owned by whoever created them and are discarded once a
Recommendation has been produced.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..domain.models import FlowKey, Recommendation


class SessionStatus(str, Enum):
    """
    ACTIVE: Waiting for an answer to the step at current_position.
    TERMINATED: A Recommendation was produced. Absorbing state.
    """
    ACTIVE = "ACTIVE"
    TERMINATED = "TERMINATED"


class DiagnosticSession(BaseModel):
    """
    The state for one user's run through a flow.
    """
    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    flow_key: FlowKey
    current_position: int = 0

    # Step position -> option text chosen at that step
    answers: Dict[int, str] = Field(default_factory=dict)

    status: SessionStatus = SessionStatus.ACTIVE
    recommendation: Optional[Recommendation] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE
