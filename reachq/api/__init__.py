"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Resolver bundle reaches handlers only through api/dependencies.get_resolvers
"""
