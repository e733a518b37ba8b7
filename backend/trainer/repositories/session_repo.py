from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select
from trainer.models import WorkoutSession
from trainer.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    def get(self, session_id: int) -> Optional[WorkoutSession]:
        return self.db.get(WorkoutSession, session_id)

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)\
                                     .order_by(WorkoutSession.id.desc())\
                                     .limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, workout_id: int, notes: str | None) -> WorkoutSession:
        # Set from Python so ordering against ended_at keeps sub-second precision
        sess = WorkoutSession(
            user_id=user_id,
            workout_id=workout_id,
            notes=notes,
            started_at=datetime.now(timezone.utc),
        )
        return self.save(sess)
