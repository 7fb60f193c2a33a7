"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields and defaults

Design Decisions:
    - Separate from core value objects: schemas are API contracts, core
      dataclasses are what the engine receives
"""
