from __future__ import annotations

from app.utils.security import generate_token, hash_password, hash_token, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("password")

    assert hashed != "password"
    assert verify_password("password", hashed)
    assert not verify_password("Password", hashed)


def test_password_hashes_are_salted():
    assert hash_password("password") != hash_password("password")


def test_verify_password_tolerates_garbage():
    assert not verify_password("password", "not-a-hash")
    assert not verify_password("password", "zz:zz")


def test_tokens_are_unique_and_hash_deterministically():
    first, second = generate_token(), generate_token()

    assert first != second
    assert hash_token(first) == hash_token(first)
    assert len(hash_token(first)) == 64
