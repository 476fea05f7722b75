import uuid


def test_login_returns_user_without_password(client, seeded):
    r = client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin123"})
    assert r.status_code == 200

    user = r.json()["user"]
    assert user["id"] == str(seeded.admin_user_id)
    assert user["role"] == "admin"
    assert "password" not in user
    assert "passwordHash" not in user


def test_login_bad_credentials(client, seeded):
    r = client.post("/api/v1/auth/login", json={"username": "admin", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"

    r = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "admin123"})
    assert r.status_code == 401


def test_me_resolves_header(client, seeded, partner_headers):
    r = client.get("/api/v1/auth/me", headers=partner_headers)
    assert r.status_code == 200
    assert r.json()["username"] == "partner"
    assert r.json()["companyName"] == "Sample Partner Inc."


def test_me_without_or_with_bad_header(client, seeded):
    assert client.get("/api/v1/auth/me").status_code == 401
    assert client.get("/api/v1/auth/me", headers={"X-User-Id": "not-a-uuid"}).status_code == 401
    assert client.get("/api/v1/auth/me", headers={"X-User-Id": str(uuid.uuid4())}).status_code == 401


def test_external_identity_is_upserted_once(client):
    identity = {"accountId": "acct-42", "username": "ext@partner.example", "name": "Ext Partner"}

    first = client.post("/api/v1/auth/external", json=identity)
    second = client.post("/api/v1/auth/external", json=identity)

    assert first.status_code == 200
    assert first.json()["user"]["role"] == "partner"
    assert first.json()["user"]["fullName"] == "Ext Partner"
    assert first.json()["user"]["id"] == second.json()["user"]["id"]


def test_logout(client):
    r = client.post("/api/v1/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"message": "Logged out successfully"}
