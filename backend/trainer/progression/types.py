# trainer/progression/types.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ExerciseMode(str, Enum):
    REPS = "REPS"
    TIME = "TIME"
    DISTANCE = "DISTANCE"


class ProgressionState(str, Enum):
    RECORDED = "recorded"
    EVALUATED = "evaluated"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


@dataclass(slots=True, frozen=True)
class RoundPerformance:
    round: int
    weight: float
    reps: Optional[float] = None
    time: Optional[float] = None
    distance: Optional[float] = None

    def primary_value(self, mode: ExerciseMode) -> Optional[float]:
        """The measured quantity that counts for ``mode``; weight is tracked separately."""
        if mode is ExerciseMode.REPS:
            return self.reps
        if mode is ExerciseMode.TIME:
            return self.time
        return self.distance


@dataclass(slots=True, frozen=True)
class Improvement:
    reps: float = 0
    weight: float = 0
    time: float = 0
    distance: float = 0
    total_weight: float = 0


@dataclass(slots=True, frozen=True)
class Progression:
    improvement: Improvement
    target_reached: bool
    next_workout_weight: float
    personal_best: bool = False


@dataclass(slots=True, frozen=True)
class ExercisePerformance:
    """
    One exercise within one completed session.

    ``weight``/``reps``/``time``/``distance`` are the representative values
    taken from the last completed round; the progression fields are filled
    in by the calculator.
    """
    exercise_id: int
    mode: ExerciseMode
    target_rounds: int
    target_reps: float
    target_weight: float
    performance_by_round: tuple[RoundPerformance, ...] = ()
    id: Optional[int] = None
    name: Optional[str] = None
    weight: float = 0
    reps: float = 0
    time: Optional[float] = None
    distance: Optional[float] = None
    target_reached: bool = False
    improvement: Improvement = field(default_factory=Improvement)
    next_workout_weight: float = 0
    personal_best: bool = False
    state: ProgressionState = ProgressionState.RECORDED
    previous_performance: tuple[RoundPerformance, ...] = ()

    @property
    def completed(self) -> bool:
        return len(self.performance_by_round) > 0

    def primary_value(self) -> float:
        if self.mode is ExerciseMode.REPS:
            return self.reps
        if self.mode is ExerciseMode.TIME:
            return self.time or 0
        return self.distance or 0


@dataclass(slots=True, frozen=True)
class WorkoutSessionSummary:
    total_duration: float
    total_weight_lifted: float
    exercises_completed: int
    weight_lifted_improvement: Optional[float]
    ready_to_progress: int
    personal_bests: int
    exercises: tuple[ExercisePerformance, ...] = ()


@dataclass(slots=True, frozen=True)
class PlannedExercise:
    """What the user is asked to do for one exercise in an upcoming session."""
    exercise_id: int
    name: str
    mode: ExerciseMode
    position: int
    target_rounds: int
    target_reps: float
    target_weight: float
    previous_performance: tuple[RoundPerformance, ...] = ()
