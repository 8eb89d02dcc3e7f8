from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from ..state.models import DiagnosticSession


class SessionRepository(ABC):
    """
    Defines how the service layer holds sessions between requests.
    The engine itself never touches this; it works on the session object.
    """

    @abstractmethod
    def get(self, session_id: str) -> Optional[DiagnosticSession]:
        """Retrieves a session by ID."""
        pass

    @abstractmethod
    def save(self, session: DiagnosticSession):
        """Stores (or replaces) the session."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass


class InMemorySessionRepository(SessionRepository):
    """
    Uses in-memory dictionary for session storage.
    Sessions are short-lived and discarded once they finish.
    """

    def __init__(self):
        self._store: Dict[str, DiagnosticSession] = {}

    def get(self, session_id: str) -> Optional[DiagnosticSession]:
        return self._store.get(session_id)

    def save(self, session: DiagnosticSession):
        session.updated_at = datetime.utcnow()
        self._store[session.session_id] = session

    def delete(self, session_id: str) -> bool:
        if session_id in self._store:
            del self._store[session_id]
            return True
        return False
