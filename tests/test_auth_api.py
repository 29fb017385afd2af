# File: tests/test_auth_api.py

from sqlalchemy import func, select

from marketplace.models.user import User


def user_count(db_session):
    return db_session.scalar(select(func.count()).select_from(User))


def test_signup_returns_public_fields(register):
    resp = register("alice", "supplier", "pw1")
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User registered successfully."
    assert set(body["user"]) == {"id", "username", "email", "role"}
    assert body["user"]["username"] == "alice"
    assert body["user"]["role"] == "supplier"


def test_signup_stores_a_hash_not_the_password(register, db_session):
    register("alice", "supplier", "pw1")
    stored = db_session.scalars(select(User).where(User.username == "alice")).one()
    assert stored.password != "pw1"
    assert stored.password.startswith("$2")


def test_duplicate_username_conflicts(register, db_session):
    assert register("alice", "supplier").status_code == 201
    before = user_count(db_session)

    resp = register("alice", "buyer", email="other@market.io")
    assert resp.status_code == 409
    assert "error" in resp.json()
    assert user_count(db_session) == before


def test_duplicate_email_conflicts(register, db_session):
    register("alice", "supplier")
    before = user_count(db_session)

    resp = register("alice2", "supplier", email="alice@market.io")
    assert resp.status_code == 409
    assert user_count(db_session) == before


def test_repeated_identical_signup_is_rejected(register, db_session):
    assert register("carol", "buyer").status_code == 201
    assert register("carol", "buyer").status_code == 409
    assert register("carol", "buyer").status_code == 409
    assert user_count(db_session) == 1


def test_signup_requires_core_fields(client):
    resp = client.post("/api/auth/signup", json={"username": "dave", "role": "buyer"})
    assert resp.status_code == 400
    assert "password" in resp.json()["error"]


def test_signup_rejects_unknown_role(register):
    resp = register("eve", "admin")
    assert resp.status_code == 400


def test_login_success_hides_password(client, supplier):
    resp = client.post("/api/auth/login", json={"username": "alice", "password": "pw1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful."
    assert body["user"]["id"] == supplier["id"]
    assert body["user"]["LEI"] == "LEI-alice"
    assert "password" not in body["user"]


def test_login_wrong_password(client, supplier):
    resp = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Incorrect password."}


def test_login_unknown_user(client):
    resp = client.post("/api/auth/login", json={"username": "ghost", "password": "pw"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found."}


def test_login_missing_fields(client):
    resp = client.post("/api/auth/login", json={"username": "alice"})
    assert resp.status_code == 400


def test_profile_with_body_credentials(client, supplier, as_user):
    resp = client.post("/api/auth/profile", json=as_user(supplier))
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert "password" not in resp.json()


def test_profile_with_basic_auth(client, buyer):
    resp = client.get("/api/auth/profile", auth=("bob", "pw2"))
    assert resp.status_code == 200
    assert resp.json()["role"] == "buyer"


def test_profile_requires_credentials(client):
    resp = client.get("/api/auth/profile")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Username and password required."}


def test_profile_rejects_bad_credentials_uniformly(client, supplier):
    unknown = client.get("/api/auth/profile", auth=("ghost", "pw1"))
    wrong = client.get("/api/auth/profile", auth=("alice", "bad"))
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


def test_update_profile_keeps_unsent_fields(client, supplier, as_user):
    resp = client.put("/api/auth/profile", json=as_user(supplier, city="Paris", phone="555-0199"))
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert resp.json()["message"] == "Profile updated successfully."
    assert user["city"] == "Paris"
    assert user["phone"] == "555-0199"
    assert user["email"] == "alice@market.io"
    assert user["address1"] == "1 Main St"


def test_update_profile_changes_password(client, supplier):
    resp = client.put("/api/auth/profile", json={"password": "fresh"}, auth=("alice", "pw1"))
    assert resp.status_code == 200

    old = client.post("/api/auth/login", json={"username": "alice", "password": "pw1"})
    new = client.post("/api/auth/login", json={"username": "alice", "password": "fresh"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_profile_email_collision(client, supplier, buyer, as_user):
    resp = client.put("/api/auth/profile", json=as_user(buyer, email="alice@market.io"))
    assert resp.status_code == 409


def test_signup_and_login_with_long_password(client, register):
    password = "p" * 80
    assert register("longpw", "supplier", password).status_code == 201

    resp = client.post("/api/auth/login", json={"username": "longpw", "password": password})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "longpw"


def test_password_change_to_long_password(client, supplier):
    password = "q" * 90
    resp = client.put("/api/auth/profile", json={"password": password}, auth=("alice", "pw1"))
    assert resp.status_code == 200

    resp = client.post("/api/auth/login", json={"username": "alice", "password": password})
    assert resp.status_code == 200
