from trainer.models.user import User, UserRole
from trainer.models.exercise import Exercise
from trainer.models.workout import Workout, WorkoutExercise
from trainer.models.workout_session import WorkoutSession
from trainer.models.performance import SessionExercise, SessionRound
from trainer.models.prescription import ExercisePrescription

__all__ = [
    "User",
    "UserRole",
    "Exercise",
    "Workout",
    "WorkoutExercise",
    "WorkoutSession",
    "SessionExercise",
    "SessionRound",
    "ExercisePrescription",
]
