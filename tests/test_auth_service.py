# File: tests/test_auth_service.py

from types import SimpleNamespace

from marketplace.core.errors import AuthenticationError, StoreError, ValidationError
from marketplace.core.security import hash_password
from marketplace.services.auth_service import AuthOutcome, Authenticator


class InMemoryStore:
    def __init__(self, *users, broken=False):
        self.users = {u.username: u for u in users}
        self.broken = broken
        self.lookups = 0

    def get_user_by_username(self, username):
        self.lookups += 1
        if self.broken:
            raise StoreError("connection refused")
        return self.users.get(username)


def make_user(username="alice", password="pw1", role="supplier"):
    return SimpleNamespace(
        id=7,
        username=username,
        password=hash_password(password),
        role=role,
        email=f"{username}@market.io",
        lei=None,
        phone=None,
        city="Lyon",
        address1=None,
        address2=None,
    )


def test_missing_credentials_skip_the_store():
    store = InMemoryStore(make_user())
    auth = Authenticator(store)

    assert auth.authenticate(None, "pw1").outcome is AuthOutcome.MISSING_CREDENTIALS
    assert auth.authenticate("alice", "").outcome is AuthOutcome.MISSING_CREDENTIALS
    assert store.lookups == 0


def test_unknown_user():
    result = Authenticator(InMemoryStore()).authenticate("ghost", "pw")
    assert result.outcome is AuthOutcome.NO_SUCH_USER
    assert result.principal is None


def test_username_is_case_sensitive():
    result = Authenticator(InMemoryStore(make_user())).authenticate("Alice", "pw1")
    assert result.outcome is AuthOutcome.NO_SUCH_USER


def test_wrong_password():
    result = Authenticator(InMemoryStore(make_user())).authenticate("alice", "nope")
    assert result.outcome is AuthOutcome.WRONG_PASSWORD
    assert not result.ok


def test_success_resolves_principal_without_password():
    result = Authenticator(InMemoryStore(make_user())).authenticate("alice", "pw1")
    assert result.ok
    assert result.principal.id == 7
    assert result.principal.role == "supplier"
    assert not hasattr(result.principal, "password")


def test_store_failure_is_reported():
    result = Authenticator(InMemoryStore(broken=True)).authenticate("alice", "pw1")
    assert result.outcome is AuthOutcome.STORE_UNAVAILABLE
    assert isinstance(result.to_error(), StoreError)


def test_failed_outcomes_map_to_errors():
    store = InMemoryStore(make_user())
    auth = Authenticator(store)

    missing = auth.authenticate("", "").to_error()
    unknown = auth.authenticate("ghost", "pw1").to_error()
    wrong = auth.authenticate("alice", "bad").to_error()

    assert isinstance(missing, ValidationError)
    assert isinstance(unknown, AuthenticationError)
    assert isinstance(wrong, AuthenticationError)
    assert unknown.message == wrong.message
