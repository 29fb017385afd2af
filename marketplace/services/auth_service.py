# File: marketplace/services/auth_service.py

"""
Authentication service.

Resolves a per-request username/password pair to a Principal. There is no
token or session layer: every protected request carries its credentials and
goes through ``Authenticator.authenticate``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from marketplace.core.errors import (
    AuthenticationError,
    MarketplaceError,
    StoreError,
    ValidationError,
)
from marketplace.core.security import verify_password
from marketplace.db.store import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated user for one request. Carries no password."""

    id: int
    username: str
    role: str
    email: Optional[str] = None
    lei: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            email=user.email,
            lei=user.lei,
            phone=user.phone,
            city=user.city,
            address1=user.address1,
            address2=user.address2,
        )


class AuthOutcome(str, enum.Enum):
    AUTHENTICATED = "authenticated"
    MISSING_CREDENTIALS = "missing_credentials"
    NO_SUCH_USER = "no_such_user"
    WRONG_PASSWORD = "wrong_password"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True)
class AuthResult:
    outcome: AuthOutcome
    principal: Optional[Principal] = None

    @property
    def ok(self) -> bool:
        return self.outcome is AuthOutcome.AUTHENTICATED

    def to_error(self) -> MarketplaceError:
        """
        Error for a failed outcome on a protected route.

        Unknown user and wrong password share one message so the response
        does not reveal which usernames exist.
        """
        if self.outcome is AuthOutcome.MISSING_CREDENTIALS:
            return ValidationError("Username and password required.")
        if self.outcome in (AuthOutcome.NO_SUCH_USER, AuthOutcome.WRONG_PASSWORD):
            return AuthenticationError("Invalid credentials.")
        if self.outcome is AuthOutcome.STORE_UNAVAILABLE:
            return StoreError()
        raise ValueError("authenticated result has no error")


class Authenticator:
    def __init__(self, store: CredentialStore):
        self.store = store

    def authenticate(self, username: Optional[str], password: Optional[str]) -> AuthResult:
        if not username or not password:
            return AuthResult(AuthOutcome.MISSING_CREDENTIALS)

        try:
            user = self.store.get_user_by_username(username)
        except StoreError:
            logger.error("Authentication for %r aborted: store unavailable", username)
            return AuthResult(AuthOutcome.STORE_UNAVAILABLE)

        if user is None:
            logger.info("Authentication failed: unknown user %r", username)
            return AuthResult(AuthOutcome.NO_SUCH_USER)

        if not verify_password(password, user.password):
            logger.info("Authentication failed: wrong password for %r", username)
            return AuthResult(AuthOutcome.WRONG_PASSWORD)

        return AuthResult(AuthOutcome.AUTHENTICATED, Principal.from_user(user))
