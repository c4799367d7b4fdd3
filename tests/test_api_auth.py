from app.core.auth import hash_password

ADMIN_EMAIL = "admin@governancesystemsint.com"
ADMIN_PASSWORD = "admin123"


def test_login_returns_user_and_token(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["tokenType"] == "bearer"
    assert body["user"]["id"] == "admin-1"
    assert body["user"]["role"] == "administrator"
    assert "password" not in body["user"]
    assert "hashedPassword" not in body["user"]


def test_login_failures_are_indistinguishable(client, store):
    store.users.create({
        "email": "former.staff@governancesystemsint.com",
        "hashed_password": hash_password("secret"),
        "first_name": "Former",
        "last_name": "Staff",
        "is_active": False,
    })

    attempts = [
        {"email": "nobody@governancesystemsint.com", "password": "secret"},
        {"email": ADMIN_EMAIL, "password": "wrong-password"},
        {"email": "former.staff@governancesystemsint.com", "password": "secret"},
    ]
    for attempt in attempts:
        resp = client.post("/api/auth/login", json=attempt)
        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid credentials"}


def test_login_requires_fields(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid login data"


def test_me(client, auth_headers):
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == ADMIN_EMAIL


def test_me_without_or_with_bad_token(client):
    assert client.get("/api/auth/me").status_code == 401
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_register_then_login(client):
    resp = client.post("/api/auth/register", json={
        "email": "amina.kato@governancesystemsint.com",
        "password": "kampala-2024",
        "firstName": "Amina",
        "lastName": "Kato",
    })
    assert resp.status_code == 201
    assert resp.json()["role"] == "user"

    login = client.post("/api/auth/login", json={
        "email": "amina.kato@governancesystemsint.com", "password": "kampala-2024",
    })
    assert login.status_code == 200

    again = client.post("/api/auth/register", json={
        "email": "amina.kato@governancesystemsint.com", "password": "x", "firstName": "A", "lastName": "K",
    })
    assert again.status_code == 409


def test_user_administration(client):
    created = client.post("/api/users", json={
        "email": "ops.manager@governancesystemsint.com",
        "password": "initial",
        "firstName": "Ops",
        "lastName": "Manager",
        "role": "manager",
        "permissions": ["read", "write"],
    })
    assert created.status_code == 201
    user = created.json()
    assert "password" not in user

    updated = client.put(f"/api/users/{user['id']}", json={"password": "rotated", "isActive": True})
    assert updated.status_code == 200

    login = client.post("/api/auth/login", json={"email": "ops.manager@governancesystemsint.com", "password": "rotated"})
    assert login.status_code == 200

    assert len(client.get("/api/users").json()) == 2
    assert client.get("/api/users/nope").json() == {"message": "User not found"}
    assert client.delete(f"/api/users/{user['id']}").status_code == 405


def test_login_with_mixed_case_address_used_at_registration(client):
    credentials = {"email": "Amina.Kato@GSI.ORG", "password": "kampala-2024"}
    registered = client.post("/api/auth/register", json={**credentials, "firstName": "Amina", "lastName": "Kato"})
    assert registered.status_code == 201

    resp = client.post("/api/auth/login", json=credentials)

    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == registered.json()["id"]


def test_login_with_malformed_address_is_plain_rejection(client):
    resp = client.post("/api/auth/login", json={"email": "not-an-address", "password": "whatever"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}
