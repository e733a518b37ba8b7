import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from trainer.db import SessionLocal
from trainer.models import ExercisePrescription
from trainer.progression import ExerciseMode, PreviousSessionLookupFailed
from trainer.repositories.catalog_repo import ExerciseRepository
from trainer.repositories.performance_repo import PerformanceRepository
from trainer.repositories.user_repo import UserRepository


def test_lookup_failure_is_raised_with_cause(monkeypatch):
    db = SessionLocal()
    repo = PerformanceRepository(db)

    def boom(*a, **kw):
        raise OperationalError("SELECT", {}, Exception("db down"))
    monkeypatch.setattr(db, "execute", boom)

    now = datetime.now(timezone.utc)
    with pytest.raises(PreviousSessionLookupFailed) as exc:
        repo.get_previous_performance(1, 1, before=now)
    assert isinstance(exc.value.__cause__, OperationalError)
    with pytest.raises(PreviousSessionLookupFailed):
        repo.get_previous_session_total(1, 1, before=now)
    db.close()


def test_no_history_is_not_an_error():
    with SessionLocal() as db:
        repo = PerformanceRepository(db)
        now = datetime.now(timezone.utc)
        assert repo.get_previous_performance(10**9, 10**9, before=now) is None
        assert repo.get_previous_session_total(10**9, 10**9, before=now) is None


def test_save_prescription_upserts_one_row():
    with SessionLocal() as db:
        user = UserRepository(db).create(email=f"{uuid.uuid4().hex[:8]}@ex.com", name="P", password_hash="")
        ex = ExerciseRepository(db).create(name=f"Press {uuid.uuid4().hex[:6]}", mode=ExerciseMode.REPS)
        repo = PerformanceRepository(db)

        assert repo.save_prescription(user.id, ex.id, 42.5, session_id=None) == 42.5
        assert repo.save_prescription(user.id, ex.id, 42.5, session_id=None) == 42.5
        assert repo.save_prescription(user.id, ex.id, 45.0, session_id=None) == 45.0

        count = db.execute(
            select(func.count()).select_from(ExercisePrescription)
            .where(ExercisePrescription.user_id == user.id, ExercisePrescription.exercise_id == ex.id)
        ).scalar_one()
        assert count == 1
        assert repo.get_prescription(user.id, ex.id).weight == 45.0
