"""Core Layer — pure query resolution logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are pure and deterministic given the injected resolvers

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
