"""Services Layer — the imperative shell around core/ validation.

Invariants:
    - Services receive their store explicitly (EntityStore Protocol)
    - Every mutation goes through RecordLifecycle; routes never call the store directly
"""
