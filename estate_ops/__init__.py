"""Estate Ops Package — validated record lifecycle for a multi-tenant real-estate platform.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
