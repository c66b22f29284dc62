"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas check request SHAPE only (types, unknown keys); record rules live in core/
    - Domain enums from core/domain_types.py used for enum fields
    - No response schema exposes a password or password hash

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
