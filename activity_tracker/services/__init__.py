"""Services Layer — the activity store and its per-identity locks.

Invariants:
    - Services own all DB writes; routes never touch ORM models directly
"""
