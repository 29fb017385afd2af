# File: marketplace/core/security.py

"""
Password hashing helpers for the marketplace API.

bcrypt salts every hash and compares in constant time inside ``checkpw``,
so two hashes of the same password never match byte-for-byte and
verification must always go through ``verify_password``.
"""

import logging

import bcrypt

from marketplace.core.config import settings
from marketplace.core.errors import PasswordHashingError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = settings.bcrypt_rounds

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plaintext: str) -> str:
    """
    Return a salted bcrypt digest for ``plaintext``.

    Input beyond 72 bytes is ignored, as bcrypt always has.
    Raises PasswordHashingError if bcrypt rejects the input.
    """
    try:
        digest = bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    except (TypeError, ValueError, AttributeError) as exc:
        logger.error("Password hashing failed: %s", exc)
        raise PasswordHashingError() from exc
    return digest.decode("utf-8")


def verify_password(plaintext: str, digest: str) -> bool:
    """
    True iff ``plaintext`` hashes to ``digest``. Any error counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_encode(plaintext), digest.encode("utf-8"))
    except (TypeError, ValueError, AttributeError) as exc:
        logger.warning("Password verification failed: %s", exc)
        return False
