"""Compose nested view objects from rows fetched by separate queries.

The ``build_*`` / ``project_*`` functions are pure and only reshape rows; the
``load_*`` functions do the fetching and hand their results to them.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Sequence

from sqlalchemy.orm import Session

from rive.models import Workout, WorkoutSession
from rive.repositories.exercise_repo import ExerciseRepository
from rive.repositories.session_repo import SessionRepository
from rive.repositories.workout_repo import WorkoutRepository
from rive.schemas.exercise import ExerciseRead
from rive.schemas.exercise_set import SetRead
from rive.schemas.session import ExerciseProgress, SessionDetails, SessionSummary, Period
from rive.schemas.workout import WorkoutDetails


# --- pure shaping ---

def project_exercises(links: Iterable[Any], library: Iterable[Any]) -> list[ExerciseRead]:
    """Map ordered ``exercise_id`` links through library rows.

    Links whose exercise is missing from ``library`` are skipped.
    """
    by_id = {row.id: row for row in library}
    out = []
    for link in links:
        row = by_id.get(link.exercise_id)
        if row is None:
            continue
        out.append(ExerciseRead(id=row.id, name=row.name, category=row.category))
    return out

def number_sets(sets: Iterable[Any]) -> list[SetRead]:
    # sorted() is stable: equal created_at keeps the incoming (id) order
    ordered = sorted(sets, key=lambda s: s.created_at)
    return [
        SetRead(
            id=s.id,
            reps=s.reps,
            weight=s.weight,
            partial_reps=s.partial_reps or 0,
            created_at=s.created_at,
            set_number=i,
        )
        for i, s in enumerate(ordered, start=1)
    ]

def build_progress(exercises: Sequence[ExerciseRead], session_exercises: Iterable[Any]) -> list[ExerciseProgress]:
    progress = [ExerciseProgress(exercise_id=ex.id, exercise_name=ex.name) for ex in exercises]
    # an exercise may appear more than once; fill its slots in order
    slots: dict[int, list[int]] = {}
    for i, ex in enumerate(exercises):
        slots.setdefault(ex.id, []).append(i)
    for se in session_exercises:
        free = slots.get(se.exercise_id)
        if not free:
            continue
        i = free.pop(0)
        sets = number_sets(se.sets or [])
        progress[i] = progress[i].model_copy(update={"sets": sets, "completed": len(sets) > 0})
    return progress

def week_bounds(today: date) -> tuple[date, date]:
    """Sunday through Saturday of the week containing ``today``."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)

def today_utc() -> date:
    return datetime.now(timezone.utc).date()

def _as_date(value: datetime | date) -> date:
    """Calendar date in UTC. Naive datetimes are already UTC (database time)."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value

def filter_by_period(summaries: Iterable[SessionSummary], period: Period, today: date) -> list[SessionSummary]:
    summaries = list(summaries)
    if period == "all":
        return summaries
    if period == "week":
        start, end = week_bounds(today)
        return [
            s for s in summaries
            if start <= _as_date(s.started_at) <= end and _as_date(s.started_at).year == today.year
        ]
    return [
        s for s in summaries
        if _as_date(s.started_at).month == today.month and _as_date(s.started_at).year == today.year
    ]


# --- fetch + compose ---

def load_workout_details(db: Session, workout: Workout) -> WorkoutDetails:
    links = WorkoutRepository(db).list_exercises(workout.id)
    library = ExerciseRepository(db).get_many(link.exercise_id for link in links)
    return WorkoutDetails(
        id=workout.id,
        name=workout.name,
        description=workout.description,
        created_at=workout.created_at,
        exercises=project_exercises(links, library),
    )

def load_session_details(db: Session, sess: WorkoutSession) -> SessionDetails:
    workout = WorkoutRepository(db).get(sess.workout_id)
    session_exercises = SessionRepository(db).list_exercises_with_sets(sess.id)
    library = ExerciseRepository(db).get_many(se.exercise_id for se in session_exercises)
    exercises = project_exercises(session_exercises, library)
    return SessionDetails(
        id=sess.id,
        workout_id=sess.workout_id,
        workout_name=workout.name if workout else "",
        started_at=sess.started_at,
        ended_at=sess.ended_at,
        completed=bool(sess.completed),
        exercises=exercises,
        progress=build_progress(exercises, session_exercises),
    )

def load_session_summaries(db: Session, user_id: int, period: Period, today: date) -> list[SessionSummary]:
    rows = SessionRepository(db).list_by_user(user_id)
    summaries = [
        SessionSummary(id=s.id, workout_id=s.workout_id, name=name, started_at=s.started_at, completed=bool(s.completed))
        for s, name in rows
    ]
    return filter_by_period(summaries, period, today)
