from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, Integer, ForeignKey, Numeric, UniqueConstraint, Enum as SAEnum
from trainer.db import Base
from trainer.progression.types import ProgressionState

Measure = Numeric(10, 2, asdecimal=False)

class SessionExercise(Base):
    """Evaluated result of one exercise in a completed session."""
    __tablename__ = "exercise_performances"
    __table_args__ = (UniqueConstraint("session_id", "exercise_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="RESTRICT"), index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    target_rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    target_reps: Mapped[float] = mapped_column(Measure, nullable=False)
    target_weight: Mapped[float] = mapped_column(Measure, nullable=False, default=0)
    target_reached: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    next_workout_weight: Mapped[float] = mapped_column(Measure, nullable=False, default=0)
    state: Mapped[ProgressionState] = mapped_column(
        SAEnum(ProgressionState, name="progression_state"),
        nullable=False,
        default=ProgressionState.RECORDED,
    )

    session = relationship("WorkoutSession", back_populates="performances")
    exercise = relationship("Exercise", lazy="joined")
    rounds = relationship(
        "SessionRound",
        back_populates="performance",
        cascade="all, delete-orphan",
        order_by="SessionRound.round",
    )

class SessionRound(Base):
    __tablename__ = "round_performances"
    __table_args__ = (UniqueConstraint("performance_id", "round"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    performance_id: Mapped[int] = mapped_column(ForeignKey("exercise_performances.id", ondelete="CASCADE"), index=True)
    round: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Measure, nullable=False, default=0)
    reps: Mapped[float | None] = mapped_column(Measure, nullable=True)
    time: Mapped[float | None] = mapped_column(Measure, nullable=True)
    distance: Mapped[float | None] = mapped_column(Measure, nullable=True)

    performance = relationship("SessionExercise", back_populates="rounds")
