"""Pydantic Schemas - response shapes for the HTTP boundary.

Design Decisions:
    - Separate from core aggregates: schemas are API contracts, aggregates hold the rules
"""
