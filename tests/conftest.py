"""Shared fixtures for the diagnostic engine tests."""

from typing import List, Tuple

import pytest

from hvac_diagnostics.domain.models import Category
from hvac_diagnostics.execution.engine import DiagnosticEngine
from hvac_diagnostics.repositories.flow import StaticFlowRepository
from hvac_diagnostics.repositories.session import InMemorySessionRepository
from hvac_diagnostics.services.diagnostic import DiagnosticService


@pytest.fixture
def flow_repository():
    """Repository over the built-in flows."""
    return StaticFlowRepository()


@pytest.fixture
def engine(flow_repository):
    return DiagnosticEngine(repository=flow_repository)


@pytest.fixture
def session_repository():
    return InMemorySessionRepository()


@pytest.fixture
def service(session_repository, engine):
    return DiagnosticService(session_repository=session_repository, engine=engine)


class RecordingSink:
    """Completion sink that remembers every call."""

    def __init__(self):
        self.calls: List[Tuple[str, Category]] = []

    def __call__(self, text: str, category: Category):
        self.calls.append((text, category))


@pytest.fixture
def sink():
    return RecordingSink()
