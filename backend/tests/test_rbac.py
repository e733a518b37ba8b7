import uuid


def test_catalogue_writes_need_admin(client, make_user):
    _, h = make_user()
    r = client.post("/exercises", headers=h, json={"name": f"Row {uuid.uuid4().hex[:6]}"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient role"
    r = client.post("/workouts", headers=h, json={"name": "W", "exercises": []})
    assert r.status_code in (403, 422)


def test_admin_catalogue_validation(client, admin_headers):
    name = f"Deadlift {uuid.uuid4().hex[:6]}"
    r = client.post("/exercises", headers=admin_headers, json={"name": name, "mode": "REPS"})
    assert r.status_code == 201
    ex_id = r.json()["id"]
    # duplicate name
    assert client.post("/exercises", headers=admin_headers, json={"name": name}).status_code == 400
    # blank name
    assert client.post("/exercises", headers=admin_headers, json={"name": "   "}).status_code == 422
    # unknown exercise in a workout
    r = client.post("/workouts", headers=admin_headers, json={
        "name": "Pull", "exercises": [{"exercise_id": 999999, "target_reps": 5}],
    })
    assert r.status_code == 404
    # same exercise twice
    r = client.post("/workouts", headers=admin_headers, json={
        "name": "Pull", "exercises": [
            {"exercise_id": ex_id, "target_reps": 5},
            {"exercise_id": ex_id, "target_reps": 8},
        ],
    })
    assert r.status_code == 422
    # weights are stored with 2 decimals
    r = client.post("/workouts", headers=admin_headers, json={
        "name": "Pull", "exercises": [{"exercise_id": ex_id, "target_reps": 5, "base_weight": 10.333}],
    })
    assert r.status_code == 422


def test_get_workout(client, make_user, workout):
    _, h = make_user()
    r = client.get(f"/workouts/{workout['id']}", headers=h)
    assert r.status_code == 200
    body = r.json()
    assert [e["position"] for e in body["exercises"]] == [1, 2]
    assert body["exercises"][0]["exercise"]["mode"] == "REPS"
    assert client.get("/workouts/999999", headers=h).status_code == 404


def test_coach_can_review_and_confirm_for_a_user(client, make_user, workout):
    _, owner = make_user()
    _, coach = make_user("coach")

    sid = client.post("/sessions", headers=owner, json={"workout_id": workout["id"]}).json()["id"]
    client.post(f"/sessions/{sid}/complete", headers=owner, json={"exercises": [
        {"exercise_id": workout["squat"], "rounds": [{"round": 1, "weight": 101, "reps": 10}]},
    ]})

    assert client.get(f"/sessions/{sid}/summary", headers=coach).status_code == 200
    r = client.post(f"/sessions/{sid}/exercises/{workout['squat']}/increase-weight", headers=coach)
    assert r.status_code == 200
    assert r.json()["weight"] == 107.5

    # the prescription belongs to the session owner
    sid2 = client.post("/sessions", headers=owner, json={"workout_id": workout["id"]}).json()["id"]
    plan = client.get(f"/sessions/{sid2}/plan", headers=owner).json()
    assert plan[0]["target_weight"] == 107.5
