"""
Repositories - access to flow definitions and live sessions.
"""
