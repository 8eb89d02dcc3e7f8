"""
Service Layer - flow routing and session orchestration.
"""
