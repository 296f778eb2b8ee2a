from fastapi.testclient import TestClient
from rive.main import app
from rive.security import create_access_token
import uuid

client = TestClient(app)
def unique(): return f"{uuid.uuid4().hex[:10]}@ex.com"

def test_token_expired():
    # create a user (so the user id exists)
    email = unique(); pw = "StrongPassw0rd!"
    client.post("/auth/register", json={"email": email, "password": pw})
    # login to get user id via /auth/me
    tok = client.post("/auth/login", json={"email": email, "password": pw}).json()["access_token"]
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {tok}"}).json()
    user_id = me["id"]

    # craft an already-expired token for the same user id
    expired = create_access_token(str(user_id), expires_minutes=-1)

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"

def test_garbage_token():
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"

def test_token_for_missing_user():
    tok = create_access_token("99999999")
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {tok}"})
    assert r.status_code == 401

def test_token_with_wrong_type_rejected():
    tok = create_access_token("1", extra={"typ": "refresh"})
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {tok}"})
    assert r.status_code == 401
