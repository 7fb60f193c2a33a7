"""Infrastructure Layer — concrete resolvers and cross-cutting concerns.

Invariants:
    - Implements the Protocols declared in core/resolver_protocols.py
    - Everything here is safe to share across concurrent requests
"""
