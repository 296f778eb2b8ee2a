"""Propagate template edits into the template's in-progress sessions.

Each routine performs the template-side write first. A failure there is
logged and re-raised. The session-side writes run afterwards as separate
commits; their failures are logged and swallowed, so the template change
stands even when no session picked it up. Completed sessions are never
touched.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rive.repositories.session_repo import SessionRepository
from rive.repositories.workout_repo import WorkoutRepository
from rive.schemas.workout import ExerciseOrder

log = logging.getLogger(__name__)

@dataclass(slots=True)
class SyncResult:
    order_index: int | None = None
    sessions_updated: int = 0
    sessions_failed: bool = False

def _incomplete_sessions(db: Session, workout_id: int) -> list[int]:
    return SessionRepository(db).incomplete_ids_for_workout(workout_id)

def _propagate(db: Session, result: SyncResult, what: str, workout_id: int,
               apply: Callable[[list[int]], int]) -> None:
    try:
        session_ids = _incomplete_sessions(db, workout_id)
        if session_ids:
            apply(session_ids)
            result.sessions_updated = len(session_ids)
    except SQLAlchemyError:
        db.rollback()
        result.sessions_failed = True
        log.exception("Error %s in sessions of workout %s", what, workout_id)

def add_exercise_to_template(db: Session, workout_id: int, exercise_id: int,
                             order_index: int | None = None) -> SyncResult:
    workouts = WorkoutRepository(db)
    try:
        if order_index is None:
            current = workouts.max_order_index(workout_id)
            order_index = current + 1 if current else 1
        workouts.add_exercise(workout_id, exercise_id=exercise_id, order_index=order_index)
    except SQLAlchemyError:
        db.rollback()
        log.exception("Error adding exercise %s to workout %s", exercise_id, workout_id)
        raise

    result = SyncResult(order_index=order_index)
    sessions = SessionRepository(db)
    _propagate(
        db, result, "adding exercise %s" % exercise_id, workout_id,
        lambda ids: sessions.add_exercise_to_sessions(ids, exercise_id=exercise_id, order_index=order_index),
    )
    log.info("exercise %s added to workout %s at %s (%d sessions updated)",
             exercise_id, workout_id, order_index, result.sessions_updated)
    return result

def remove_exercise_from_template(db: Session, workout_id: int, exercise_id: int) -> SyncResult:
    try:
        WorkoutRepository(db).remove_exercise(workout_id, exercise_id)
    except SQLAlchemyError:
        db.rollback()
        log.exception("Error removing exercise %s from workout %s", exercise_id, workout_id)
        raise

    result = SyncResult()
    sessions = SessionRepository(db)
    _propagate(
        db, result, "removing exercise %s" % exercise_id, workout_id,
        lambda ids: sessions.remove_exercise_from_sessions(ids, exercise_id),
    )
    log.info("exercise %s removed from workout %s (%d sessions updated)",
             exercise_id, workout_id, result.sessions_updated)
    return result

def reorder_template_exercises(db: Session, workout_id: int,
                               orders: Iterable[ExerciseOrder]) -> SyncResult:
    """Apply ``order_index`` per exercise to the template, then to each open session.

    One update per (session, exercise) pair; a failed pair is logged and the
    loop moves on.
    """
    orders = list(orders)
    workouts = WorkoutRepository(db)
    try:
        for o in orders:
            workouts.set_exercise_order(workout_id, o.exercise_id, o.order_index)
    except SQLAlchemyError:
        db.rollback()
        log.exception("Error updating exercise order of workout %s", workout_id)
        raise

    result = SyncResult()
    sessions = SessionRepository(db)
    try:
        session_ids = _incomplete_sessions(db, workout_id)
    except SQLAlchemyError:
        db.rollback()
        result.sessions_failed = True
        log.exception("Error loading sessions of workout %s", workout_id)
        return result

    for session_id in session_ids:
        for o in orders:
            try:
                sessions.set_exercise_order(session_id, o.exercise_id, o.order_index)
            except SQLAlchemyError:
                db.rollback()
                result.sessions_failed = True
                log.exception("Error updating exercise order of session %s", session_id)
    result.sessions_updated = len(session_ids)
    log.info("workout %s reordered (%d sessions updated)", workout_id, result.sessions_updated)
    return result

def delete_template(db: Session, workout_id: int) -> int:
    """Delete the template's sessions, then the template. Returns sessions deleted.

    The two deletes are separate commits; if the second fails the sessions
    are already gone.
    """
    deleted = SessionRepository(db).delete_for_workout(workout_id)
    WorkoutRepository(db).delete(workout_id)
    log.info("workout %s deleted with %d sessions", workout_id, deleted)
    return deleted
