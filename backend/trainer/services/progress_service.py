# trainer/services/progress_service.py
from __future__ import annotations
import dataclasses
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.orm import Session

from trainer.models import WorkoutSession
from trainer.progression import (
    ExercisePerformance,
    InvalidPerformanceData,
    PlannedExercise,
    ProgressionState,
    WorkoutSessionSummary,
    confirm_weight_increase,
    evaluate_exercise,
    prescribed_weight,
    record_performance,
    summarize_session,
)
from trainer.repositories.performance_repo import PerformanceRepository, to_domain

logger = logging.getLogger(__name__)


def _utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def session_duration(session: WorkoutSession) -> float:
    if session.ended_at is None or session.started_at is None:
        return 0
    return max((_utc(session.ended_at) - _utc(session.started_at)).total_seconds(), 0)


class ProgressService:
    def __init__(self, db: Session):
        self.db = db
        self.performances = PerformanceRepository(db)

    def _history(
        self, session: WorkoutSession
    ) -> list[tuple[PlannedExercise, Optional[ExercisePerformance]]]:
        started_at = _utc(session.started_at)
        planned = []
        for we in session.workout.exercises:
            previous = self.performances.get_previous_performance(
                session.user_id, we.exercise_id, before=started_at
            )
            confirmed = self.performances.get_prescription(session.user_id, we.exercise_id)
            planned.append((
                PlannedExercise(
                    exercise_id=we.exercise_id,
                    name=we.exercise.name,
                    mode=we.exercise.mode,
                    position=we.position,
                    target_rounds=we.target_rounds,
                    target_reps=we.target_reps,
                    target_weight=prescribed_weight(
                        confirmed.weight if confirmed else None, previous, we.base_weight
                    ),
                    previous_performance=previous.performance_by_round if previous else (),
                ),
                previous,
            ))
        return planned

    def plan(self, session: WorkoutSession) -> list[PlannedExercise]:
        return [p for p, _ in self._history(session)]

    def complete(
        self, session: WorkoutSession, submitted: Iterable[Mapping[str, Any]]
    ) -> WorkoutSessionSummary:
        """
        Record and evaluate every submitted exercise, persist the results and
        close the session. ``submitted`` items carry ``exercise_id`` and
        ``rounds``.
        """
        if session.ended_at is not None:
            raise ValueError("session_already_completed")

        history = {p.exercise_id: (p, prev) for p, prev in self._history(session)}
        by_exercise: dict[int, Mapping[str, Any]] = {}
        for item in submitted:
            exercise_id = item["exercise_id"]
            if exercise_id not in history:
                raise InvalidPerformanceData(f"exercise {exercise_id} is not part of this workout")
            if exercise_id in by_exercise:
                raise InvalidPerformanceData(f"exercise {exercise_id} submitted more than once")
            by_exercise[exercise_id] = item

        evaluated = []
        for exercise_id, (planned, previous) in sorted(history.items(), key=lambda kv: kv[1][0].position):
            item = by_exercise.get(exercise_id)
            if item is None:
                continue
            current = record_performance(
                exercise_id,
                planned.mode,
                target_rounds=planned.target_rounds,
                target_reps=planned.target_reps,
                target_weight=planned.target_weight,
                rounds=item["rounds"],
                name=planned.name,
            )
            evaluated.append(evaluate_exercise(current, previous))

        previous_total = self.performances.get_previous_session_total(
            session.user_id, session.workout_id, before=_utc(session.started_at)
        )
        rows = self.performances.save_session_results(
            session, evaluated, ended_at=datetime.now(timezone.utc)
        )
        evaluated = [dataclasses.replace(ex, id=row.id) for ex, row in zip(evaluated, rows)]

        summary = summarize_session(evaluated, previous_total, total_duration=session_duration(session))
        logger.info(
            "completed session=%s user=%s exercises=%d volume=%.1f",
            session.id, session.user_id, summary.exercises_completed, summary.total_weight_lifted,
        )
        return summary

    def summary(self, session: WorkoutSession) -> WorkoutSessionSummary:
        """Recomputed from the stored rows on every call."""
        started_at = _utc(session.started_at)
        exercises = []
        for row in self.performances.list_for_session(session.id):
            previous = self.performances.get_previous_performance(
                session.user_id, row.exercise_id, before=started_at
            )
            ex = evaluate_exercise(to_domain(row), previous)
            # The suggestion is fixed at completion; a confirmation is terminal
            ex = dataclasses.replace(ex, next_workout_weight=row.next_workout_weight)
            if row.state is ProgressionState.CONFIRMED:
                ex = dataclasses.replace(ex, state=ProgressionState.CONFIRMED)
            exercises.append(ex)

        previous_total = self.performances.get_previous_session_total(
            session.user_id, session.workout_id, before=started_at
        )
        return summarize_session(exercises, previous_total, total_duration=session_duration(session))

    def confirm_increase(self, session: WorkoutSession, exercise_id: int) -> float:
        return confirm_weight_increase(self.performances, exercise_id, session.user_id, session.id)
