"""
Point the app at a throwaway SQLite file and create the schema before any
test module imports trainer.main.
"""
import os
import tempfile
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

_db_dir = Path(tempfile.mkdtemp(prefix="trainer-tests-"))
os.environ.setdefault("DB_URL", f"sqlite:///{_db_dir / 'trainer.db'}")

from trainer.db import Base, engine  # noqa: E402
from trainer import models  # noqa: E402,F401

Base.metadata.create_all(engine)


PWD = "StrongPassw0rd!"


@pytest.fixture(scope="session")
def client():
    from trainer.main import app
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Register and log in a fresh user; returns (user_id, auth headers)."""
    def _make(role=None):
        email = f"u_{uuid.uuid4().hex[:10]}@example.com"
        r = client.post("/auth/register", json={"email": email, "name": "Test", "password": PWD})
        assert r.status_code == 201, r.text
        user_id = r.json()["id"]
        if role:
            from trainer.db import SessionLocal
            from trainer.repositories.user_repo import UserRepository
            with SessionLocal() as db:
                UserRepository(db).set_role(user_id, role=role)
        token = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def admin_headers(make_user):
    return make_user("admin")[1]


@pytest.fixture
def workout(client, admin_headers):
    """A squat (REPS, 3x10 from 100) + plank (TIME, 2x60s) workout."""
    suffix = uuid.uuid4().hex[:8]
    squat = client.post("/exercises", headers=admin_headers,
                        json={"name": f"Squat {suffix}", "mode": "REPS"}).json()
    plank = client.post("/exercises", headers=admin_headers,
                        json={"name": f"Plank {suffix}", "mode": "TIME"}).json()
    r = client.post("/workouts", headers=admin_headers, json={
        "name": f"Legs {suffix}",
        "exercises": [
            {"exercise_id": squat["id"], "target_rounds": 3, "target_reps": 10, "base_weight": 100},
            {"exercise_id": plank["id"], "target_rounds": 2, "target_reps": 60},
        ],
    })
    assert r.status_code == 201, r.text
    return {"id": r.json()["id"], "squat": squat["id"], "plank": plank["id"]}
