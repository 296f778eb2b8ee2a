from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, String
from rive.db import Base

class LibraryExercise(Base):
    """Shared, read-only reference data."""
    __tablename__ = "exercise_library"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(60), nullable=False, index=True)

class FavoriteExercise(Base):
    __tablename__ = "favorite_exercises"
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercise_library.id", ondelete="CASCADE"), primary_key=True)
