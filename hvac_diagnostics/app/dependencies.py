"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core Singleton services (Repositories, Router, Engine).
2. Wiring them together (e.g., injecting the Flow Repository into the Engine).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

Tests replace any of these through `app.dependency_overrides`.
"""


from functools import lru_cache
from fastapi import Depends

from ..repositories.flow import FlowRepository, StaticFlowRepository
from ..repositories.session import SessionRepository, InMemorySessionRepository
from ..execution.engine import DiagnosticEngine
from ..services.flow_router import FlowRouter, KeywordFlowRouter
from ..services.diagnostic import DiagnosticService

# The Router (Singleton)
@lru_cache()
def get_flow_router() -> FlowRouter:
    return KeywordFlowRouter()

# Flow Repository (Singleton)
# Flows are validated once here; a broken flow fails application startup.
@lru_cache()
def get_flow_repository() -> FlowRepository:
    return StaticFlowRepository()

# Session Repository (Singleton)
# Note: In-memory storage must be a singleton so data persists across requests!
@lru_cache()
def get_session_repository() -> SessionRepository:
    return InMemorySessionRepository()

# The Engine (Singleton Service)
@lru_cache()
def get_diagnostic_engine(
    repo: FlowRepository = Depends(get_flow_repository),
    router: FlowRouter = Depends(get_flow_router)
) -> DiagnosticEngine:
    return DiagnosticEngine(repository=repo, router=router)

# The Diagnostic Service (Singleton Service)
@lru_cache()
def get_diagnostic_service(
    session_repo: SessionRepository = Depends(get_session_repository),
    engine: DiagnosticEngine = Depends(get_diagnostic_engine)
) -> DiagnosticService:
    """
    Injects all necessary components into the DiagnosticService.
    """
    return DiagnosticService(
        session_repository=session_repo,
        engine=engine
    )
