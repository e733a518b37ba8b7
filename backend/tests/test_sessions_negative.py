import pytest


def start(client, headers, workout_id):
    return client.post("/sessions", headers=headers, json={"workout_id": workout_id}).json()["id"]


def test_start_session_404_for_missing_workout(client, make_user):
    _, h = make_user()
    r = client.post("/sessions", headers=h, json={"workout_id": 999999})
    assert r.status_code == 404


def test_unknown_session_404(client, make_user):
    _, h = make_user()
    assert client.get("/sessions/999999/plan", headers=h).status_code == 404
    assert client.post("/sessions/999999/complete", headers=h, json={"exercises": []}).status_code == 404


@pytest.mark.parametrize("rounds", [
    [{"round": 1, "weight": 100, "reps": 10}, {"round": 3, "weight": 100, "reps": 10}],
    [{"round": 1, "weight": 100, "reps": 10}, {"round": 1, "weight": 100, "reps": 10}],
    [{"round": i, "weight": 100, "reps": 10} for i in range(1, 5)],
    [{"round": 1, "weight": 100}],
])
def test_malformed_rounds_422(client, make_user, workout, rounds):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    r = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": [
        {"exercise_id": workout["squat"], "rounds": rounds},
    ]})
    assert r.status_code == 422, r.text
    # nothing was stored, the session can still be completed
    ok = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": []})
    assert ok.status_code == 200


def test_negative_weight_422(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    r = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": [
        {"exercise_id": workout["squat"], "rounds": [{"round": 1, "weight": -5, "reps": 10}]},
    ]})
    assert r.status_code == 422


def test_exercise_outside_workout_422(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    r = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": [
        {"exercise_id": 999999, "rounds": [{"round": 1, "weight": 10, "reps": 10}]},
    ]})
    assert r.status_code == 422


def test_completing_twice_409(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    assert client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": []}).status_code == 200
    r = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": []})
    assert r.status_code == 409


def test_summary_before_completion_404(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    assert client.get(f"/sessions/{sid}/summary", headers=h).status_code == 404


def test_increase_weight_not_eligible_409(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": [
        {"exercise_id": workout["squat"], "rounds": [{"round": 1, "weight": 100, "reps": 9}]},
        {"exercise_id": workout["plank"], "rounds": [{"round": 1, "weight": 0, "time": 90}]},
    ]})
    assert client.post(f"/sessions/{sid}/exercises/{workout['squat']}/increase-weight", headers=h).status_code == 409
    assert client.post(f"/sessions/{sid}/exercises/{workout['plank']}/increase-weight", headers=h).status_code == 409


def test_increase_weight_without_record_404(client, make_user, workout):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    r = client.post(f"/sessions/{sid}/exercises/{workout['squat']}/increase-weight", headers=h)
    assert r.status_code == 404


def test_other_users_session_403(client, make_user, workout):
    _, owner = make_user()
    _, stranger = make_user()
    sid = start(client, owner, workout["id"])
    assert client.get(f"/sessions/{sid}/plan", headers=stranger).status_code == 403
    r = client.post(f"/sessions/{sid}/complete", headers=stranger, json={"exercises": []})
    assert r.status_code == 403


@pytest.mark.parametrize("round_", [
    {"round": 1, "weight": 12.125, "reps": 10},
    {"round": 1, "weight": 100, "reps": 10.555},
])
def test_more_than_two_decimals_422(client, make_user, workout, round_):
    _, h = make_user()
    sid = start(client, h, workout["id"])
    r = client.post(f"/sessions/{sid}/complete", headers=h, json={"exercises": [
        {"exercise_id": workout["squat"], "rounds": [round_]},
    ]})
    assert r.status_code == 422
