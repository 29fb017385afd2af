# File: marketplace/services/user_service.py

"""
Account operations: signup, login and profile read/update.
"""

import logging

from marketplace.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from marketplace.core.security import hash_password
from marketplace.db.store import CredentialStore
from marketplace.models.user import Role
from marketplace.schemas.user import (
    LoginPayload,
    ProfileUpdatePayload,
    ProfileUser,
    SignupPayload,
    SignupUser,
    UserRead,
)
from marketplace.services.auth_service import AuthOutcome, Authenticator, Principal

logger = logging.getLogger(__name__)

SIGNUP_REQUIRED_FIELDS = ("username", "email", "password", "role")


class UserService:
    def __init__(self, store: CredentialStore):
        self.store = store

    def signup(self, payload: SignupPayload) -> SignupUser:
        missing = [name for name in SIGNUP_REQUIRED_FIELDS if not getattr(payload, name)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")
        if payload.role not in {r.value for r in Role}:
            raise ValidationError("Role must be 'supplier' or 'buyer'.")

        if self.store.user_exists(username=payload.username, email=payload.email):
            raise ConflictError("User with this email or username already exists.")

        user = self.store.create_user(
            username=payload.username,
            lei=payload.lei,
            email=payload.email,
            phone=payload.phone,
            role=payload.role,
            city=payload.city,
            address1=payload.address1,
            address2=payload.address2,
            password=hash_password(payload.password),
        )
        logger.info("Registered %s %r (id=%s)", user.role, user.username, user.id)
        return SignupUser.model_validate(user)

    def login(self, payload: LoginPayload) -> UserRead:
        """
        Unlike protected routes, login tells an unknown username (404)
        apart from a wrong password (401).
        """
        result = Authenticator(self.store).authenticate(payload.username, payload.password)
        if result.outcome is AuthOutcome.NO_SUCH_USER:
            raise NotFoundError("User not found.")
        if result.outcome is AuthOutcome.WRONG_PASSWORD:
            raise AuthenticationError("Incorrect password.")
        if not result.ok:
            raise result.to_error()
        return UserRead.model_validate(result.principal)

    def get_profile(self, principal: Principal) -> UserRead:
        return UserRead.model_validate(principal)

    def update_profile(self, principal: Principal, payload: ProfileUpdatePayload) -> ProfileUser:
        changes = payload.model_dump(exclude_unset=True)
        password = changes.pop("password", None)
        if password:
            changes["password"] = hash_password(password)

        user = self.store.update_user(principal.id, **changes)
        if user is None:
            # principal was resolved earlier in this request; the row vanished since
            raise StoreError(f"user {principal.id} disappeared during profile update")
        logger.info("Updated profile for %r: %s", user.username, sorted(changes))
        return ProfileUser.model_validate(user)
