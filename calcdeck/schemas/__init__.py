"""Pydantic Schemas — request/response validation for API endpoints and seed files.

Invariants:
    - Schemas validate at system boundary (user input, API responses, YAML content)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
