"""
API Layer - FastAPI adapter over the DiagnosticService.
"""
