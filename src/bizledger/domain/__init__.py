"""Domain layer for bizledger.

Submodules are imported directly (e.g. ``bizledger.domain.aggregation``) so
that the database layer can depend on entities without pulling in services.
"""
