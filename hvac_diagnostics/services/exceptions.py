"""
Service Layer Exceptions

Custom exceptions for the DiagnosticService and related orchestration logic.
"""


class SessionNotFoundError(Exception):
    """Raised when a session ID is unknown (never created, finished or abandoned)."""
    pass


class UnsupportedToolCallError(Exception):
    """Raised when the assistant forwards a function call other than startDiagnostic."""
    pass
