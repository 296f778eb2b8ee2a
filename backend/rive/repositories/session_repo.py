from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, Iterable
from sqlalchemy import select, update, delete
from sqlalchemy.orm import joinedload
from rive.models import WorkoutSession, SessionExercise, Workout, WorkoutExercise
from rive.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get(self, session_id: int) -> Optional[WorkoutSession]:
        return self.db.get(WorkoutSession, session_id)

    def get_owned(self, session_id: int, user_id: int) -> Optional[WorkoutSession]:
        sess = self.get(session_id)
        if sess is None or sess.user_id != user_id:
            return None
        return sess

    def list_by_user(self, user_id: int) -> list[tuple[WorkoutSession, str]]:
        stmt = (
            select(WorkoutSession, Workout.name)
            .join(Workout, Workout.id == WorkoutSession.workout_id)
            .where(WorkoutSession.user_id == user_id)
            .order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
        )
        return [(s, name) for s, name in self.db.execute(stmt).all()]

    def incomplete_ids_for_workout(self, workout_id: int) -> list[int]:
        stmt = select(WorkoutSession.id).where(
            WorkoutSession.workout_id == workout_id,
            WorkoutSession.completed.is_(False),
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_for_workout(self, workout_id: int) -> int:
        stmt = select(WorkoutSession.id).where(WorkoutSession.workout_id == workout_id)
        return len(self.db.execute(stmt).scalars().all())

    # WRITES
    def start(self, user_id: int, workout_id: int, template: Iterable[WorkoutExercise]) -> WorkoutSession:
        """Create an in-progress session holding its own copy of the template's exercises."""
        sess = WorkoutSession(user_id=user_id, workout_id=workout_id, completed=False)
        sess.exercises = [
            SessionExercise(exercise_id=we.exercise_id, order_index=we.order_index)
            for we in template
        ]
        return self.add_and_commit(sess)

    def create_completed(self, user_id: int, workout_id: int) -> WorkoutSession:
        now = datetime.now(timezone.utc)
        sess = WorkoutSession(user_id=user_id, workout_id=workout_id, completed=True, ended_at=now)
        return self.add_and_commit(sess)

    def complete(self, sess: WorkoutSession) -> WorkoutSession:
        sess.completed = True
        sess.ended_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(sess)
        return sess

    def delete(self, session_id: int) -> int:
        result = self.db.execute(delete(WorkoutSession).where(WorkoutSession.id == session_id))
        self.db.commit()
        return result.rowcount

    def delete_for_workout(self, workout_id: int) -> int:
        result = self.db.execute(delete(WorkoutSession).where(WorkoutSession.workout_id == workout_id))
        self.db.commit()
        return result.rowcount

    # SESSION EXERCISES
    def list_exercises_with_sets(self, session_id: int) -> list[SessionExercise]:
        # single joined read: session exercises and their sets
        stmt = (
            select(SessionExercise)
            .options(joinedload(SessionExercise.sets))
            .where(SessionExercise.session_id == session_id)
            .order_by(SessionExercise.order_index.asc(), SessionExercise.id.asc())
        )
        return list(self.db.execute(stmt).unique().scalars().all())

    def list_exercises(self, session_ids: list[int]) -> list[SessionExercise]:
        stmt = (
            select(SessionExercise)
            .where(SessionExercise.session_id.in_(session_ids))
            .order_by(SessionExercise.session_id.asc(), SessionExercise.order_index.asc(), SessionExercise.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_exercise_to_sessions(self, session_ids: list[int], *, exercise_id: int, order_index: int) -> int:
        rows = [
            SessionExercise(session_id=sid, exercise_id=exercise_id, order_index=order_index)
            for sid in session_ids
        ]
        self.db.add_all(rows)
        self.db.commit()
        return len(rows)

    def remove_exercise_from_sessions(self, session_ids: list[int], exercise_id: int) -> int:
        result = self.db.execute(
            delete(SessionExercise).where(
                SessionExercise.session_id.in_(session_ids),
                SessionExercise.exercise_id == exercise_id,
            )
        )
        self.db.commit()
        return result.rowcount

    def set_exercise_order(self, session_id: int, exercise_id: int, order_index: int) -> int:
        result = self.db.execute(
            update(SessionExercise)
            .where(SessionExercise.session_id == session_id, SessionExercise.exercise_id == exercise_id)
            .values(order_index=order_index)
        )
        self.db.commit()
        return result.rowcount
