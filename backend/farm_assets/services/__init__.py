"""Service Layer - async use cases that validate input, mutate aggregates and persist.

Invariants:
    - Every use case runs all of its validators before touching an aggregate
    - Multi-aggregate writes go through FarmChildSync
"""
