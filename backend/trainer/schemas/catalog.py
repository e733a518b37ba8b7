from typing import Annotated
from pydantic import BaseModel, Field, field_validator

from trainer.progression.types import ExerciseMode
from trainer.schemas.performance import two_places

NameStr = Annotated[str, Field(max_length=120)]
PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0, le=1000)]

class ExerciseCreate(BaseModel):
    name: NameStr
    mode: ExerciseMode = ExerciseMode.REPS
    instructions: str | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class ExerciseRead(BaseModel):
    id: int
    name: str
    mode: ExerciseMode
    instructions: str | None = None

    model_config = {"from_attributes": True}

class WorkoutExerciseIn(BaseModel):
    exercise_id: PosInt
    target_rounds: PosInt = 3
    # reps, seconds or metres depending on the exercise mode
    target_reps: Annotated[float, Field(gt=0)]
    base_weight: NonNegFloat = 0

    @field_validator("target_reps", "base_weight")
    @classmethod
    def stored_precision(cls, v: float) -> float:
        return two_places(v)

class WorkoutExerciseRead(WorkoutExerciseIn):
    position: int
    exercise: ExerciseRead

    model_config = {"from_attributes": True}

class WorkoutCreate(BaseModel):
    name: NameStr
    description: str | None = None
    exercises: Annotated[list[WorkoutExerciseIn], Field(min_length=1)]

    @field_validator("exercises")
    @classmethod
    def unique_exercises(cls, v: list[WorkoutExerciseIn]) -> list[WorkoutExerciseIn]:
        ids = [e.exercise_id for e in v]
        if len(ids) != len(set(ids)):
            raise ValueError("an exercise can appear only once per workout")
        return v

class WorkoutRead(BaseModel):
    id: int
    name: str
    description: str | None = None
    exercises: list[WorkoutExerciseRead]

    model_config = {"from_attributes": True}
