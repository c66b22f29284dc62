"""Core Layer — pure record rules, normalization, defaults and credentials. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators are pure and deterministic: same candidate + lookups, same result

Design Decisions:
    - Functional core separated from imperative shell: services/ does the IO around it
    - Reference existence arrives as precomputed lookups, never as a store handle
"""
