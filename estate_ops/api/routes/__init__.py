"""Route Modules — one file per entity kind.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to RecordLifecycle)
    - Request bodies are dumped with exclude_unset: only explicitly-sent fields become changes

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
