"""Farm Assets Package - farms, reservoirs, areas and inventory materials.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
