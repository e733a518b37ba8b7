# trainer/progression/calculator.py
from __future__ import annotations
import dataclasses
import logging
import math
from decimal import ROUND_CEILING, Decimal
from typing import Optional

from .errors import InvalidWeight
from .types import (
    ExerciseMode,
    ExercisePerformance,
    Improvement,
    Progression,
    ProgressionState,
)

logger = logging.getLogger(__name__)

# Fixed step whatever unit the user displays weights in
WEIGHT_STEP = Decimal("2.5")
INCREASE_FACTOR = Decimal("1.05")


def compute_improvement(
    current: ExercisePerformance,
    previous: Optional[ExercisePerformance],
) -> Improvement:
    """Raw deltas against the previous session; negative values mean regression."""
    if previous is None:
        return Improvement()
    return Improvement(
        reps=current.reps - previous.reps,
        weight=current.weight - previous.weight,
        time=(current.time or 0) - (previous.time or 0),
        distance=(current.distance or 0) - (previous.distance or 0),
        total_weight=current.weight * current.reps - previous.weight * previous.reps,
    )


def is_target_reached(current: ExercisePerformance) -> bool:
    """
    Only REPS-mode work progresses automatically. TIME and DISTANCE
    exercises never report their target as reached, so they never get a
    weight increase suggested.
    """
    if current.mode is not ExerciseMode.REPS or not current.completed:
        return False
    return current.reps >= current.target_reps


def next_workout_weight(current_weight: float, target_reached: bool) -> float:
    """5% up, rounded up to the next 2.5 step, when the target was reached."""
    try:
        finite = math.isfinite(current_weight)
    except TypeError as e:
        raise InvalidWeight(f"weight must be a number, got {current_weight!r}") from e
    if not finite or current_weight < 0:
        raise InvalidWeight(f"weight must be finite and non-negative, got {current_weight!r}")

    if not target_reached:
        return current_weight

    raised = Decimal(str(current_weight)) * INCREASE_FACTOR
    steps = (raised / WEIGHT_STEP).to_integral_value(rounding=ROUND_CEILING)
    return float(steps * WEIGHT_STEP)


def is_personal_best(
    current: ExercisePerformance,
    previous: Optional[ExercisePerformance],
) -> bool:
    if previous is None or not current.completed:
        return False
    return current.primary_value() > previous.primary_value()


def evaluate_progression(
    current: ExercisePerformance,
    previous: Optional[ExercisePerformance],
) -> Progression:
    reached = is_target_reached(current)
    progression = Progression(
        improvement=compute_improvement(current, previous),
        target_reached=reached,
        next_workout_weight=next_workout_weight(current.weight, reached),
        personal_best=is_personal_best(current, previous),
    )
    logger.debug(
        "evaluated exercise=%s reached=%s next=%s previous=%s",
        current.exercise_id, reached, progression.next_workout_weight, previous is not None,
    )
    return progression


def evaluate_exercise(
    current: ExercisePerformance,
    previous: Optional[ExercisePerformance],
) -> ExercisePerformance:
    """Copy of ``current`` with its progression fields and state filled in."""
    p = evaluate_progression(current, previous)
    state = ProgressionState.PENDING_CONFIRMATION if p.target_reached else ProgressionState.EVALUATED
    return dataclasses.replace(
        current,
        improvement=p.improvement,
        target_reached=p.target_reached,
        next_workout_weight=p.next_workout_weight,
        personal_best=p.personal_best,
        state=state,
        previous_performance=previous.performance_by_round if previous else (),
    )


def prescribed_weight(
    confirmed: Optional[float],
    previous: Optional[ExercisePerformance],
    baseline: float,
) -> float:
    """
    Weight to prescribe for the next occurrence of an exercise: a confirmed
    increase first, then whatever the user last worked with, then the
    workout's baseline for a first attempt.
    """
    if confirmed is not None:
        return confirmed
    if previous is not None and previous.completed:
        return previous.weight
    return baseline
