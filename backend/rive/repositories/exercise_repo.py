from __future__ import annotations
from typing import Optional, Iterable
from sqlalchemy import select, delete
from rive.models import LibraryExercise, FavoriteExercise
from rive.repositories.base import BaseRepository, Page

# The "Arms" picker filter spans several library categories
ARMS_CATEGORIES = ("Biceps", "Triceps", "Shoulders")

class ExerciseRepository(BaseRepository[LibraryExercise]):
    model = LibraryExercise

    def get(self, exercise_id: int) -> Optional[LibraryExercise]:
        return self.db.get(LibraryExercise, exercise_id)

    def get_many(self, exercise_ids: Iterable[int]) -> list[LibraryExercise]:
        ids = list(set(exercise_ids))
        if not ids:
            return []
        stmt = select(LibraryExercise).where(LibraryExercise.id.in_(ids))
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return len(self.db.execute(select(LibraryExercise.id)).scalars().all())

    def search(
        self,
        term: str = "",
        *,
        category: str = "",
        exclude: Iterable[int] = (),
        limit: int = 50,
        offset: int = 0,
    ) -> Page[LibraryExercise]:
        stmt = select(LibraryExercise).order_by(LibraryExercise.name.asc(), LibraryExercise.id.asc())
        if category == "Arms":
            stmt = stmt.where(LibraryExercise.category.in_(ARMS_CATEGORIES))
        elif category:
            stmt = stmt.where(LibraryExercise.category == category)
        excluded = list(exclude)
        if excluded:
            stmt = stmt.where(LibraryExercise.id.not_in(excluded))
        stmt = stmt.where(LibraryExercise.name.ilike(f"%{term}%"))
        items = self.db.execute(stmt.limit(limit).offset(offset)).scalars().all()
        return Page(items=list(items), limit=limit, offset=offset)

    def add_many(self, rows: Iterable[tuple[str, str]]) -> int:
        entities = [LibraryExercise(name=name, category=category) for name, category in rows]
        self.db.add_all(entities)
        self.db.commit()
        return len(entities)

    # FAVORITES
    def list_favorites(self, user_id: int) -> list[LibraryExercise]:
        stmt = (
            select(LibraryExercise)
            .join(FavoriteExercise, FavoriteExercise.exercise_id == LibraryExercise.id)
            .where(FavoriteExercise.user_id == user_id)
            .order_by(LibraryExercise.name.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_favorite(self, user_id: int, exercise_id: int) -> None:
        if self.db.get(FavoriteExercise, (user_id, exercise_id)) is None:
            self.db.add(FavoriteExercise(user_id=user_id, exercise_id=exercise_id))
            self.db.commit()

    def remove_favorite(self, user_id: int, exercise_id: int) -> None:
        self.db.execute(
            delete(FavoriteExercise).where(
                FavoriteExercise.user_id == user_id,
                FavoriteExercise.exercise_id == exercise_id,
            )
        )
        self.db.commit()
