"""Credential Manager — bcrypt password derivation and verification.

Invariants:
    - derive_credential salts every call: two derivations of one password differ
    - Hashes are compared only through verify_credential, never by equality
    - verify_credential returns False (never raises) when no hash is stored
    - Passwords are truncated to 72 bytes (bcrypt input limit) on both paths

Design Decisions:
    - Synchronous and CPU-bound: callers on an event loop must run these
      off-thread (services/record_lifecycle.py uses asyncio.to_thread)
    - Work factor is a parameter, not a module constant, so tests can hash fast
"""

import bcrypt

from estate_ops.core.errors import DependencyError

DEFAULT_ROUNDS = 12


def _prepare_password(password: str) -> bytes:
    """Encode and truncate to bcrypt's 72-byte limit."""
    return password.encode("utf-8")[:72]


def derive_credential(raw_password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Salted one-way hash of raw_password."""
    try:
        hashed = bcrypt.hashpw(
            _prepare_password(raw_password), bcrypt.gensalt(rounds=rounds),
        )
    except ValueError as e:
        raise DependencyError(str(e), "credential derivation")
    return hashed.decode("utf-8")


def verify_credential(raw_password: str, hashed_credential: str | None) -> bool:
    """True iff raw_password matches the stored hash."""
    if not hashed_credential:
        return False
    try:
        return bcrypt.checkpw(
            _prepare_password(raw_password), hashed_credential.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
