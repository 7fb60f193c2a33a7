"""Services Layer — orchestrates core resolvers for one request.

Invariants:
    - Services receive their collaborators as arguments (no global lookups)
"""
