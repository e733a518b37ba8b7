# trainer/progression/aggregator.py
from __future__ import annotations
import logging
from typing import Iterable, Optional, Protocol

from .errors import InvalidPerformanceData, NotEligibleForIncrease, PerformanceNotFound
from .types import ExerciseMode, ExercisePerformance, WorkoutSessionSummary

logger = logging.getLogger(__name__)


class PrescriptionStore(Protocol):
    def get_session_performance(
        self, session_id: int, exercise_id: int, user_id: int
    ) -> Optional[ExercisePerformance]: ...

    def save_prescription(
        self, user_id: int, exercise_id: int, weight: float, *, session_id: int
    ) -> float: ...


def total_weight_lifted(exercises: Iterable[ExercisePerformance]) -> float:
    """Rep-based volume only: TIME and DISTANCE rounds never count, whatever they carry."""
    total = 0.0
    for ex in exercises:
        if ex.mode is not ExerciseMode.REPS:
            continue
        for r in ex.performance_by_round:
            if r.reps is not None:
                total += r.weight * r.reps
    return total


def weight_lifted_improvement(current_total: float, previous_total: Optional[float]) -> Optional[float]:
    if not previous_total:
        return None
    return (current_total - previous_total) / previous_total * 100


def summarize_session(
    exercises: Iterable[ExercisePerformance],
    previous_total: Optional[float] = None,
    *,
    total_duration: float = 0,
) -> WorkoutSessionSummary:
    exercises = tuple(exercises)
    if total_duration < 0:
        raise InvalidPerformanceData("total_duration cannot be negative")

    total = total_weight_lifted(exercises)
    return WorkoutSessionSummary(
        total_duration=total_duration,
        total_weight_lifted=total,
        exercises_completed=sum(1 for ex in exercises if ex.completed),
        weight_lifted_improvement=weight_lifted_improvement(total, previous_total),
        ready_to_progress=sum(
            1 for ex in exercises if ex.target_reached and ex.mode is ExerciseMode.REPS
        ),
        personal_bests=sum(1 for ex in exercises if ex.personal_best),
        exercises=exercises,
    )


def confirm_weight_increase(
    store: PrescriptionStore,
    exercise_id: int,
    user_id: int,
    session_id: int,
) -> float:
    """
    Persist the weight suggested at evaluation time as the user's next
    prescription for the exercise. The stored suggestion is written as an
    absolute value, so repeating the call leaves the same prescription.
    """
    perf = store.get_session_performance(session_id, exercise_id, user_id)
    if perf is None:
        raise PerformanceNotFound(
            f"no evaluated performance for exercise {exercise_id} in session {session_id}"
        )
    if not perf.target_reached:
        raise NotEligibleForIncrease(
            f"target not reached for exercise {exercise_id} in session {session_id}"
        )

    weight = store.save_prescription(
        user_id, exercise_id, perf.next_workout_weight, session_id=session_id
    )
    logger.info(
        "confirmed weight increase user=%s exercise=%s session=%s weight=%s",
        user_id, exercise_id, session_id, weight,
    )
    return weight
