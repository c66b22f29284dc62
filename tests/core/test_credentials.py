"""Credential Manager — tests for bcrypt derivation and verification.

Tests cover:
    - Derived hash is not the raw password and verifies
    - Two derivations of one password differ (salted)
    - Wrong password, missing hash and malformed hash all verify False
    - Work factor is embedded in the hash
"""

from estate_ops.core.credentials import derive_credential, verify_credential

FAST_ROUNDS = 4


def test_derived_hash_verifies():
    hashed = derive_credential("secret123", FAST_ROUNDS)
    assert hashed != "secret123"
    assert verify_credential("secret123", hashed)


def test_wrong_password_rejected():
    hashed = derive_credential("secret123", FAST_ROUNDS)
    assert not verify_credential("secret124", hashed)


def test_derivation_is_salted():
    assert derive_credential("same", FAST_ROUNDS) != derive_credential("same", FAST_ROUNDS)


def test_missing_hash_never_verifies():
    assert not verify_credential("secret123", None)
    assert not verify_credential("secret123", "")


def test_malformed_hash_returns_false():
    assert not verify_credential("secret123", "not-a-bcrypt-hash")


def test_rounds_embedded_in_hash():
    assert derive_credential("secret123", FAST_ROUNDS).startswith("$2b$04$")


def test_unicode_password_round_trip():
    hashed = derive_credential("pässwörd", FAST_ROUNDS)
    assert verify_credential("pässwörd", hashed)
