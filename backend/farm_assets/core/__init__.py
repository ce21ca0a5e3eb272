"""Core Layer - aggregates, value objects and validators. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Aggregate constructors and mutators are atomic: validate first, then assign
    - Repository contracts live here as Protocols; implementations live outside

Design Decisions:
    - Functional core separated from the async shell that persists results
"""
