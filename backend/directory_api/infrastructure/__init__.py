"""Infrastructure Layer — database access, store implementations, OAuth, logging.

Invariants:
    - Infrastructure may import core/ types; core never imports infrastructure
    - SQLAlchemy errors never escape this layer unmapped

Design Decisions:
    - Store classes implement core/repository_protocols structurally
"""
