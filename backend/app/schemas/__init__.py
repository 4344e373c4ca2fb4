"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas are API contracts, models (app/models) are persistence
"""
