from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, Text, Enum as SAEnum
from trainer.db import Base
from trainer.progression.types import ExerciseMode

class Exercise(Base):
    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    mode: Mapped[ExerciseMode] = mapped_column(
        SAEnum(ExerciseMode, name="exercise_mode"),
        nullable=False,
        server_default=ExerciseMode.REPS.value,
    )
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
