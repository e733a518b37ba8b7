# trainer/repositories/performance_repo.py
from __future__ import annotations
import dataclasses
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from trainer.models import ExercisePrescription, SessionExercise, SessionRound, WorkoutSession
from trainer.progression import (
    ExercisePerformance,
    PreviousSessionLookupFailed,
    ProgressionState,
    RoundPerformance,
    record_performance,
    total_weight_lifted,
)
from trainer.repositories.base import BaseRepository


def to_domain(row: SessionExercise) -> ExercisePerformance:
    """Rebuild the evaluated record from its stored rows."""
    perf = record_performance(
        row.exercise_id,
        row.exercise.mode,
        target_rounds=row.target_rounds,
        target_reps=row.target_reps,
        target_weight=row.target_weight,
        rounds=[
            RoundPerformance(round=r.round, weight=r.weight, reps=r.reps, time=r.time, distance=r.distance)
            for r in row.rounds
        ],
        id=row.id,
        name=row.exercise.name,
    )
    return dataclasses.replace(
        perf,
        target_reached=row.target_reached,
        next_workout_weight=row.next_workout_weight,
        state=row.state,
    )


class PerformanceRepository(BaseRepository[SessionExercise]):
    """Storage side of progression: history lookups and prescription writes."""

    # READS
    def list_for_session(self, session_id: int) -> list[SessionExercise]:
        stmt = select(SessionExercise).where(SessionExercise.session_id == session_id)\
                                      .order_by(SessionExercise.position.asc(), SessionExercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_previous_performance(
        self, user_id: int, exercise_id: int, *, before: datetime
    ) -> Optional[ExercisePerformance]:
        """
        Most recent record of the exercise from a session that ended before
        ``before``. Records without any round (the exercise was skipped) are
        not history.
        """
        stmt = (
            select(SessionExercise)
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
            .where(
                WorkoutSession.user_id == user_id,
                SessionExercise.exercise_id == exercise_id,
                WorkoutSession.ended_at.is_not(None),
                WorkoutSession.ended_at < before,
                exists().where(SessionRound.performance_id == SessionExercise.id),
            )
            .order_by(WorkoutSession.ended_at.desc(), WorkoutSession.id.desc())
            .limit(1)
        )
        try:
            row = self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise PreviousSessionLookupFailed(
                f"previous performance lookup failed for user={user_id} exercise={exercise_id}"
            ) from e
        return to_domain(row) if row else None

    def get_previous_session_total(
        self, user_id: int, workout_id: int, *, before: datetime
    ) -> Optional[float]:
        stmt = (
            select(WorkoutSession)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.workout_id == workout_id,
                WorkoutSession.ended_at.is_not(None),
                WorkoutSession.ended_at < before,
            )
            .order_by(WorkoutSession.ended_at.desc(), WorkoutSession.id.desc())
            .limit(1)
        )
        try:
            previous = self.db.execute(stmt).scalars().first()
            if previous is None:
                return None
            rows = self.list_for_session(previous.id)
        except SQLAlchemyError as e:
            raise PreviousSessionLookupFailed(
                f"previous session lookup failed for user={user_id} workout={workout_id}"
            ) from e
        return total_weight_lifted(to_domain(r) for r in rows)

    def get_session_performance(
        self, session_id: int, exercise_id: int, user_id: int
    ) -> Optional[ExercisePerformance]:
        stmt = (
            select(SessionExercise)
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)
            .where(
                SessionExercise.session_id == session_id,
                SessionExercise.exercise_id == exercise_id,
                WorkoutSession.user_id == user_id,
            )
        )
        row = self.db.execute(stmt).scalars().first()
        return to_domain(row) if row else None

    def get_prescription(self, user_id: int, exercise_id: int) -> Optional[ExercisePrescription]:
        stmt = select(ExercisePrescription).where(
            ExercisePrescription.user_id == user_id,
            ExercisePrescription.exercise_id == exercise_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def save_session_results(
        self, session: WorkoutSession, exercises: Iterable[ExercisePerformance], *, ended_at: datetime
    ) -> list[SessionExercise]:
        rows = []
        for position, ex in enumerate(exercises, start=1):
            row = SessionExercise(
                exercise_id=ex.exercise_id,
                position=position,
                target_rounds=ex.target_rounds,
                target_reps=ex.target_reps,
                target_weight=ex.target_weight,
                target_reached=ex.target_reached,
                next_workout_weight=ex.next_workout_weight,
                state=ex.state,
                rounds=[
                    SessionRound(round=r.round, weight=r.weight, reps=r.reps, time=r.time, distance=r.distance)
                    for r in ex.performance_by_round
                ],
            )
            session.performances.append(row)
            rows.append(row)
        session.ended_at = ended_at
        self.db.commit()
        return rows

    def save_prescription(
        self, user_id: int, exercise_id: int, weight: float, *, session_id: int
    ) -> float:
        """
        Upsert keyed by user+exercise and return the weight now in effect.
        A concurrent insert of the same key loses the race on the unique
        constraint and is retried as an update; both writers carry the same
        value so last writer wins. A prescription confirmed from a session
        that ended later than ``session_id`` is kept.
        """
        try:
            stored = self._upsert_prescription(user_id, exercise_id, weight, session_id)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            stored = self._upsert_prescription(user_id, exercise_id, weight, session_id)
            self.db.commit()
        return stored

    def _ended_later(self, session_id: Optional[int], than_session_id: Optional[int]) -> bool:
        if session_id is None or than_session_id is None or session_id == than_session_id:
            return False
        this = self.db.get(WorkoutSession, session_id)
        other = self.db.get(WorkoutSession, than_session_id)
        if this is None or other is None or this.ended_at is None or other.ended_at is None:
            return False
        return (this.ended_at, this.id) > (other.ended_at, other.id)

    def _upsert_prescription(self, user_id: int, exercise_id: int, weight: float, session_id: int) -> float:
        current = self.get_prescription(user_id, exercise_id)
        if current is None:
            self.db.add(ExercisePrescription(
                user_id=user_id, exercise_id=exercise_id, weight=weight, source_session_id=session_id,
            ))
            stored = weight
        elif self._ended_later(current.source_session_id, session_id):
            stored = current.weight
        else:
            current.weight = weight
            current.source_session_id = session_id
            stored = weight

        row = self.db.execute(
            select(SessionExercise).where(
                SessionExercise.session_id == session_id,
                SessionExercise.exercise_id == exercise_id,
            )
        ).scalars().first()
        if row is not None:
            row.state = ProgressionState.CONFIRMED
        self.db.flush()
        return stored
