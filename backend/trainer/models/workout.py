from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text, Numeric, UniqueConstraint
from trainer.db import Base

class Workout(Base):
    __tablename__ = "workouts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercises = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.position",
    )

class WorkoutExercise(Base):
    """An exercise slot in a workout, with the baseline prescription for first attempts."""
    __tablename__ = "workout_exercises"
    __table_args__ = (UniqueConstraint("workout_id", "exercise_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="RESTRICT"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    target_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    target_reps: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    base_weight: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)

    workout = relationship("Workout", back_populates="exercises")
    exercise = relationship("Exercise", lazy="joined")
