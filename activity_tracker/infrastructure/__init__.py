"""Infrastructure Layer — database sessions, block-height clock, logging.

Invariants:
    - Infrastructure maps external failures to core/errors.py types
    - Singletons (db_manager, block_clock) initialized by the app lifespan

Design Decisions:
    - Module-level singletons over DI containers: one process, explicit init
"""
