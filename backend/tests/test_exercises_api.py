import uuid
from fastapi.testclient import TestClient
from rive.main import app

client = TestClient(app)
PWD = "StrongPassw0rd!"

def auth_headers():
    email = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": email, "password": PWD})
    tok = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
    H = {"Authorization": f"Bearer {tok}"}
    client.put("/users/me/profile", headers=H, json={"first_name": "Test", "last_name": "User"})
    return H

def by_name(H, name):
    r = client.get("/exercises", headers=H, params={"search": name})
    return next(e for e in r.json() if e["name"] == name)

def test_search_is_case_insensitive_and_sorted():
    H = auth_headers()
    r = client.get("/exercises", headers=H, params={"search": "bench"})
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert names == ["Bench Press", "Incline Bench Press"]

def test_arms_category_spans_biceps_triceps_shoulders():
    H = auth_headers()
    r = client.get("/exercises", headers=H, params={"category": "Arms"})
    cats = {e["category"] for e in r.json()}
    assert cats == {"Biceps", "Triceps", "Shoulders"}

def test_plain_category_filter():
    H = auth_headers()
    r = client.get("/exercises", headers=H, params={"category": "Chest"})
    assert r.json()
    assert all(e["category"] == "Chest" for e in r.json())

def test_exclude_and_paging():
    H = auth_headers()
    bench = by_name(H, "Bench Press")
    r = client.get("/exercises", headers=H, params={"search": "bench", "exclude": [bench["id"]]})
    assert [e["name"] for e in r.json()] == ["Incline Bench Press"]
    r = client.get("/exercises", headers=H, params={"limit": 2, "offset": 1})
    assert len(r.json()) == 2

def test_favorites_roundtrip():
    H = auth_headers()
    curl = by_name(H, "Barbell Curl")
    assert client.get("/exercises/favorites", headers=H).json() == []
    assert client.put(f"/exercises/{curl['id']}/favorite", headers=H).status_code == 204
    # idempotent
    assert client.put(f"/exercises/{curl['id']}/favorite", headers=H).status_code == 204
    favs = client.get("/exercises/favorites", headers=H).json()
    assert [f["id"] for f in favs] == [curl["id"]]
    assert client.delete(f"/exercises/{curl['id']}/favorite", headers=H).status_code == 204
    assert client.get("/exercises/favorites", headers=H).json() == []

def test_favorite_unknown_exercise_404():
    H = auth_headers()
    assert client.put("/exercises/999999/favorite", headers=H).status_code == 404

def test_recent_exercises_follow_draft_selection():
    H = auth_headers()
    assert client.get("/exercises/recent", headers=H).json() == []
    bench = by_name(H, "Bench Press")
    squat = by_name(H, "Back Squat")
    client.put("/drafts/workout/exercise", headers=H, json={"exerciseId": bench["id"]})
    client.delete("/drafts/workout", headers=H)
    client.put("/drafts/workout/exercise", headers=H, json={"exerciseId": squat["id"]})
    recent = client.get("/exercises/recent", headers=H).json()
    assert [e["id"] for e in recent] == [squat["id"], bench["id"]]
