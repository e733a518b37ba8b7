from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, Numeric, UniqueConstraint, func
from trainer.db import Base

class ExercisePrescription(Base):
    """Confirmed working weight for a user's next occurrence of an exercise."""
    __tablename__ = "exercise_prescriptions"
    __table_args__ = (UniqueConstraint("user_id", "exercise_id", name="uq_prescription_user_exercise"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="CASCADE"), index=True)
    weight: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    source_session_id: Mapped[int | None] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="SET NULL"), nullable=True
    )
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="prescriptions")
