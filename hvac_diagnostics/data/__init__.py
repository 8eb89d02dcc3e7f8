"""
Static flow definitions and the resolver table they reference.
"""
