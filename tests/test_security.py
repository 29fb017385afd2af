# File: tests/test_security.py

from marketplace.core.security import hash_password, verify_password


def test_hash_is_salted():
    first = hash_password("wheat")
    second = hash_password("wheat")
    assert first != second
    assert first.startswith("$2")


def test_verify_round_trip():
    digest = hash_password("wheat")
    assert verify_password("wheat", digest)
    assert not verify_password("barley", digest)


def test_verify_never_raises_on_garbage_digest():
    assert verify_password("wheat", "not-a-bcrypt-hash") is False
    assert verify_password("wheat", None) is False


def test_long_password_uses_first_72_bytes():
    digest = hash_password("p" * 80)
    assert verify_password("p" * 80, digest)
    assert verify_password("p" * 72, digest)
    assert not verify_password("p" * 71, digest)
