from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func, update, delete
from rive.models import Workout, WorkoutExercise
from rive.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def get(self, workout_id: int) -> Optional[Workout]:
        return self.db.get(Workout, workout_id)

    def get_owned(self, workout_id: int, user_id: int) -> Optional[Workout]:
        workout = self.get(workout_id)
        if workout is None or workout.user_id != user_id:
            return None
        return workout

    def list_with_counts(self, user_id: int) -> list[tuple[Workout, int]]:
        stmt = (
            select(Workout, func.count(WorkoutExercise.id))
            .outerjoin(WorkoutExercise, WorkoutExercise.workout_id == Workout.id)
            .where(Workout.user_id == user_id)
            .group_by(Workout.id)
            .order_by(Workout.created_at.desc(), Workout.id.desc())
        )
        return [(w, count) for w, count in self.db.execute(stmt).all()]

    def create(self, user_id: int, *, name: str, description: str | None) -> Workout:
        return self.add_and_commit(Workout(user_id=user_id, name=name, description=description))

    def update(self, workout: Workout, **changes) -> Workout:
        """Apply only the given columns (``name``, ``description``)."""
        for field in ("name", "description"):
            if field in changes:
                setattr(workout, field, changes[field])
        self.db.commit()
        self.db.refresh(workout)
        return workout

    def delete(self, workout_id: int) -> int:
        # workout_exercises go with it via ON DELETE CASCADE
        result = self.db.execute(delete(Workout).where(Workout.id == workout_id))
        self.db.commit()
        return result.rowcount

    # TEMPLATE EXERCISES
    def list_exercises(self, workout_id: int) -> list[WorkoutExercise]:
        stmt = (
            select(WorkoutExercise)
            .where(WorkoutExercise.workout_id == workout_id)
            .order_by(WorkoutExercise.order_index.asc(), WorkoutExercise.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def has_exercise(self, workout_id: int, exercise_id: int) -> bool:
        stmt = select(WorkoutExercise.id).where(
            WorkoutExercise.workout_id == workout_id,
            WorkoutExercise.exercise_id == exercise_id,
        ).limit(1)
        return self.db.execute(stmt).first() is not None

    def max_order_index(self, workout_id: int) -> Optional[int]:
        stmt = select(func.max(WorkoutExercise.order_index)).where(WorkoutExercise.workout_id == workout_id)
        return self.db.execute(stmt).scalar_one()

    def add_exercise(self, workout_id: int, *, exercise_id: int, order_index: int) -> WorkoutExercise:
        row = WorkoutExercise(workout_id=workout_id, exercise_id=exercise_id, order_index=order_index)
        return self.add_and_commit(row)

    def remove_exercise(self, workout_id: int, exercise_id: int) -> int:
        result = self.db.execute(
            delete(WorkoutExercise).where(
                WorkoutExercise.workout_id == workout_id,
                WorkoutExercise.exercise_id == exercise_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def set_exercise_order(self, workout_id: int, exercise_id: int, order_index: int) -> int:
        result = self.db.execute(
            update(WorkoutExercise)
            .where(WorkoutExercise.workout_id == workout_id, WorkoutExercise.exercise_id == exercise_id)
            .values(order_index=order_index)
        )
        self.db.commit()
        return result.rowcount
