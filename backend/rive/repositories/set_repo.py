from __future__ import annotations
from typing import Optional, Iterable
from sqlalchemy import select, delete
from rive.models import ExerciseSet, SessionExercise
from rive.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    model = ExerciseSet

    def get_session_exercise(self, session_id: int, exercise_id: int) -> Optional[SessionExercise]:
        stmt = (
            select(SessionExercise)
            .where(SessionExercise.session_id == session_id, SessionExercise.exercise_id == exercise_id)
            .order_by(SessionExercise.id.asc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def ensure_session_exercise(self, session_id: int, exercise_id: int, *, order_index: int) -> SessionExercise:
        se = self.get_session_exercise(session_id, exercise_id)
        if se is None:
            se = SessionExercise(session_id=session_id, exercise_id=exercise_id, order_index=order_index)
            self.db.add(se)
        else:
            se.order_index = order_index
        self.db.commit()
        self.db.refresh(se)
        return se

    def list_by_session_exercise(self, session_exercise_id: int) -> list[ExerciseSet]:
        stmt = (
            select(ExerciseSet)
            .where(ExerciseSet.session_exercise_id == session_exercise_id)
            .order_by(ExerciseSet.created_at.asc(), ExerciseSet.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def replace_sets(self, session_exercise_id: int, sets: Iterable[tuple[int, float, int]]) -> list[ExerciseSet]:
        """Drop the exercise's recorded sets and insert (reps, weight, partial_reps) rows in order."""
        self.db.execute(delete(ExerciseSet).where(ExerciseSet.session_exercise_id == session_exercise_id))
        for reps, weight, partial_reps in sets:
            # flushed one by one so ids follow the submitted order
            self.db.add(ExerciseSet(
                session_exercise_id=session_exercise_id,
                reps=reps,
                weight=weight,
                partial_reps=partial_reps or 0,
            ))
            self.db.flush()
        self.db.commit()
        return self.list_by_session_exercise(session_exercise_id)

    def add_session_exercise(self, session_id: int, exercise_id: int, *, order_index: int) -> SessionExercise:
        return self.add_and_commit(
            SessionExercise(session_id=session_id, exercise_id=exercise_id, order_index=order_index)
        )

    def clear_session_exercises(self, session_id: int) -> int:
        # their sets go with them via ON DELETE CASCADE
        result = self.db.execute(delete(SessionExercise).where(SessionExercise.session_id == session_id))
        self.db.commit()
        return result.rowcount
