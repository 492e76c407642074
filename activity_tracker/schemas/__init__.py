"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape and types at the system boundary
    - Value rules (empty description, priority range) are enforced again by the store

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
