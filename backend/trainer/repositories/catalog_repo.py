# trainer/repositories/catalog_repo.py
from __future__ import annotations
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from trainer.models import Exercise, Workout, WorkoutExercise
from trainer.progression.types import ExerciseMode
from trainer.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    def get(self, exercise_id: int) -> Optional[Exercise]:
        return self.db.get(Exercise, exercise_id)

    def get_by_name(self, name: str) -> Optional[Exercise]:
        return self.db.execute(select(Exercise).where(Exercise.name == name)).scalar_one_or_none()

    def create(self, *, name: str, mode: ExerciseMode, instructions: str | None = None) -> Exercise:
        try:
            return self.save(Exercise(name=name, mode=mode, instructions=instructions))
        except IntegrityError:
            self.db.rollback()
            raise ValueError("exercise_already_exists")

class WorkoutRepository(BaseRepository[Workout]):
    def get(self, workout_id: int) -> Optional[Workout]:
        return self.db.get(Workout, workout_id)

    def create(self, *, name: str, description: str | None, exercises: Iterable[dict]) -> Workout:
        """``exercises`` are dicts of WorkoutExercise columns, in workout order."""
        workout = Workout(name=name, description=description)
        for position, item in enumerate(exercises, start=1):
            workout.exercises.append(WorkoutExercise(position=position, **item))
        try:
            return self.save(workout)
        except IntegrityError:
            self.db.rollback()
            raise ValueError("invalid_workout_exercises")
