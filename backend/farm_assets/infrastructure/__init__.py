"""Infrastructure Layer - storage adapters, file storage and logging setup.

Invariants:
    - Infrastructure implements core Protocols, never the other way round
"""
