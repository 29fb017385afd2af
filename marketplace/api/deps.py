# File: marketplace/api/deps.py

import json
from collections.abc import Callable, Generator

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from marketplace.db.session import SessionLocal
from marketplace.db.store import SqlStore
from marketplace.models.user import Role
from marketplace.schemas.user import Credentials
from marketplace.services.auth_service import Authenticator, Principal
from marketplace.services.authorization import require_any_role
from marketplace.services.offer_service import OfferService
from marketplace.services.user_service import UserService

http_basic = HTTPBasic(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> SqlStore:
    return SqlStore(db)


def get_authenticator(store: SqlStore = Depends(get_store)) -> Authenticator:
    return Authenticator(store)


def get_offer_service(store: SqlStore = Depends(get_store)) -> OfferService:
    return OfferService(store)


def get_user_service(store: SqlStore = Depends(get_store)) -> UserService:
    return UserService(store)


async def get_credentials(
    request: Request,
    basic: HTTPBasicCredentials | None = Depends(http_basic),
) -> Credentials:
    """
    Read ``username``/``password`` from the JSON body, falling back to an
    ``Authorization: Basic`` header when the body does not carry both.
    """
    body = {}
    raw = await request.body()
    if raw:
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            parsed = None
        if isinstance(parsed, dict):
            body = parsed

    username = body.get("username")
    password = body.get("password")
    if (not username or not password) and basic is not None:
        username, password = basic.username, basic.password

    return Credentials(
        username=username if isinstance(username, str) else None,
        password=password if isinstance(password, str) else None,
    )


def get_principal(
    credentials: Credentials = Depends(get_credentials),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Principal:
    result = authenticator.authenticate(credentials.username, credentials.password)
    if not result.ok:
        raise result.to_error()
    return result.principal


def requires_roles(*roles: Role) -> Callable[..., Principal]:
    """
    Dependency factory: authenticate, then gate on role.

        principal: Principal = Depends(requires_roles(Role.SUPPLIER))
    """

    def _dependency(principal: Principal = Depends(get_principal)) -> Principal:
        require_any_role(principal, roles).raise_for_denial()
        return principal

    return _dependency


any_user = requires_roles(Role.SUPPLIER, Role.BUYER)
supplier_only = requires_roles(Role.SUPPLIER)
buyer_only = requires_roles(Role.BUYER)
