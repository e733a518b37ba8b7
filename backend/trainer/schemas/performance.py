from typing import Annotated
from pydantic import BaseModel, Field, field_validator

from trainer.progression.types import ExerciseMode, ProgressionState

PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0, le=1000)]
Measure = Annotated[float, Field(ge=0)]

def two_places(v: float | None) -> float | None:
    # measures are stored as NUMERIC(10, 2)
    if v is not None and round(v, 2) != v:
        raise ValueError("at most 2 decimal places")
    return v

class RoundIn(BaseModel):
    round: PosInt
    weight: NonNegFloat = 0
    reps: Measure | None = None
    time: Measure | None = None
    distance: Measure | None = None

    @field_validator("weight", "reps", "time", "distance")
    @classmethod
    def stored_precision(cls, v: float | None) -> float | None:
        return two_places(v)

class ExerciseResultIn(BaseModel):
    exercise_id: PosInt
    rounds: list[RoundIn]

class SessionComplete(BaseModel):
    exercises: list[ExerciseResultIn]

class RoundRead(BaseModel):
    round: int
    weight: float
    reps: float | None = None
    time: float | None = None
    distance: float | None = None

class ImprovementRead(BaseModel):
    reps: float
    weight: float
    time: float
    distance: float
    total_weight: float

class ExercisePerformanceRead(BaseModel):
    id: int | None = None
    exercise_id: int
    name: str | None = None
    mode: ExerciseMode
    target_rounds: int
    target_reps: float
    target_weight: float
    weight: float
    reps: float
    time: float | None = None
    distance: float | None = None
    target_reached: bool
    personal_best: bool
    improvement: ImprovementRead
    next_workout_weight: float
    state: ProgressionState
    performance_by_round: list[RoundRead]
    previous_performance: list[RoundRead] = []

class WorkoutSummaryRead(BaseModel):
    total_duration: float
    total_weight_lifted: float
    exercises_completed: int
    weight_lifted_improvement: float | None = None
    ready_to_progress: int
    personal_bests: int
    exercises: list[ExercisePerformanceRead]

class PlannedExerciseRead(BaseModel):
    exercise_id: int
    name: str
    mode: ExerciseMode
    position: int
    target_rounds: int
    target_reps: float
    target_weight: float
    previous_performance: list[RoundRead] = []

class PrescriptionRead(BaseModel):
    exercise_id: int
    weight: float
