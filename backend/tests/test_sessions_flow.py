from fastapi.testclient import TestClient
from rive.main import app
import uuid

client = TestClient(app)

def unique_email():
    return f"u_{uuid.uuid4().hex[:10]}@example.com"

def login_headers():
    email = unique_email()
    pwd = "StrongPassw0rd!"
    client.post("/auth/register", json={"email": email, "password": pwd})
    r = client.post("/auth/login", json={"email": email, "password": pwd})
    assert r.status_code == 200
    H = {"Authorization": f"Bearer {r.json()['access_token']}"}
    client.put("/users/me/profile", headers=H, json={"first_name": "Sam", "last_name": "Lee"})
    return H

def exercise_id(H, name):
    r = client.get("/exercises", headers=H, params={"search": name})
    return next(e["id"] for e in r.json() if e["name"] == name)

def push_day(H):
    wid = client.post("/workouts", headers=H, json={"name": "Push Day"}).json()["id"]
    bench, incline = exercise_id(H, "Bench Press"), exercise_id(H, "Incline Bench Press")
    client.post(f"/workouts/{wid}/exercises", headers=H, json={"exercise_id": bench})
    client.post(f"/workouts/{wid}/exercises", headers=H, json={"exercise_id": incline})
    return wid, bench, incline

def test_start_session_record_sets_and_complete():
    H = login_headers()
    wid, bench, incline = push_day(H)

    # start session: copies the template's exercises
    r = client.post("/sessions", headers=H, json={"workout_id": wid})
    assert r.status_code == 201
    assert r.json()["completed"] is False
    session_id = r.json()["id"]

    body = client.get(f"/sessions/{session_id}", headers=H).json()
    assert body["workout_name"] == "Push Day"
    assert [e["id"] for e in body["exercises"]] == [bench, incline]
    assert all(p["completed"] is False for p in body["progress"])

    # record sets
    r = client.put(f"/sessions/{session_id}/exercises/{bench}/sets", headers=H,
                   json={"sets": [{"reps": 5, "weight": 100}, {"reps": 3, "weight": 100, "partial_reps": 2}]})
    assert r.status_code == 200, r.text
    assert [(s["set_number"], s["reps"]) for s in r.json()] == [(1, 5), (2, 3)]

    body = client.get(f"/sessions/{session_id}", headers=H).json()
    bench_progress = body["progress"][0]
    assert bench_progress["completed"] is True
    assert [s["partial_reps"] for s in bench_progress["sets"]] == [0, 2]
    assert body["progress"][1]["completed"] is False

    # re-recording replaces
    r = client.put(f"/sessions/{session_id}/exercises/{bench}/sets", headers=H,
                   json={"sets": [{"reps": 10, "weight": 60}]})
    assert len(r.json()) == 1

    # complete
    r = client.post(f"/sessions/{session_id}/complete", headers=H)
    assert r.status_code == 200
    assert r.json()["completed"] is True
    assert r.json()["ended_at"] is not None

def test_recording_unplanned_exercise_appends_it():
    H = login_headers()
    wid, bench, incline = push_day(H)
    session_id = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    dips = exercise_id(H, "Tricep Pushdown")
    r = client.put(f"/sessions/{session_id}/exercises/{dips}/sets", headers=H, json={"sets": [{"reps": 12, "weight": 30}]})
    assert r.status_code == 200
    body = client.get(f"/sessions/{session_id}", headers=H).json()
    assert [e["id"] for e in body["exercises"]] == [bench, incline, dips]

def test_invalid_sets_rejected():
    H = login_headers()
    wid, bench, _ = push_day(H)
    session_id = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    url = f"/sessions/{session_id}/exercises/{bench}/sets"
    assert client.put(url, headers=H, json={"sets": [{"reps": 0, "weight": 50}]}).status_code == 422
    assert client.put(url, headers=H, json={"sets": [{"reps": 5, "weight": 0}]}).status_code == 422
    assert client.put(url, headers=H, json={"sets": [{"reps": 5, "weight": 5, "partial_reps": -1}]}).status_code == 422

def test_list_sessions_newest_first():
    H = login_headers()
    wid, _, _ = push_day(H)
    first = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    second = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    rows = client.get("/sessions", headers=H, params={"period": "all"}).json()
    assert [s["id"] for s in rows] == [second, first]
    assert rows[0]["name"] == "Push Day"
    assert client.get("/sessions", headers=H, params={"period": "year"}).status_code == 422

def test_completed_session_keeps_removed_exercise():
    H = login_headers()
    wid, bench, incline = push_day(H)
    done = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    client.post(f"/sessions/{done}/complete", headers=H)
    open_ = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]

    r = client.delete(f"/workouts/{wid}/exercises/{incline}", headers=H)
    assert r.json() == {"success": True, "sessions_updated": 1}

    assert [e["id"] for e in client.get(f"/workouts/{wid}", headers=H).json()["exercises"]] == [bench]
    assert [e["id"] for e in client.get(f"/sessions/{open_}", headers=H).json()["exercises"]] == [bench]
    assert [e["id"] for e in client.get(f"/sessions/{done}", headers=H).json()["exercises"]] == [bench, incline]

def test_cancel_session():
    H = login_headers()
    wid, _, _ = push_day(H)
    session_id = client.post("/sessions", headers=H, json={"workout_id": wid}).json()["id"]
    assert client.delete(f"/sessions/{session_id}", headers=H).status_code == 204
    assert client.get(f"/sessions/{session_id}", headers=H).status_code == 404

def test_requires_auth():
    # no token -> 401s
    assert client.get("/sessions").status_code == 401
    assert client.post("/sessions", json={"workout_id": 1}).status_code == 401
