from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from rive.db import get_db
from rive.deps.auth import require_complete_profile
from rive.models import User, WorkoutSession
from rive.repositories.exercise_repo import ExerciseRepository
from rive.repositories.session_repo import SessionRepository
from rive.repositories.set_repo import SetRepository
from rive.repositories.workout_repo import WorkoutRepository
from rive.schemas.exercise_set import SetRead, SetsReplace
from rive.schemas.session import Period, SessionDetails, SessionRead, SessionStart, SessionSummary
from rive.services.aggregation import load_session_details, load_session_summaries, number_sets, today_utc

router = APIRouter(prefix="/sessions", tags=["sessions"])

def _owned_session(session_id: int, db: Session, current: User) -> WorkoutSession:
    sess = SessionRepository(db).get_owned(session_id, current.id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return sess

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionStart, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    workouts = WorkoutRepository(db)
    if not workouts.get_owned(payload.workout_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    template = workouts.list_exercises(payload.workout_id)
    return SessionRepository(db).start(current.id, payload.workout_id, template)

@router.get("", response_model=list[SessionSummary])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
    period: Period = Query("all"),
):
    return load_session_summaries(db, current.id, period, today_utc())

@router.get("/{session_id}", response_model=SessionDetails)
def get_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    sess = _owned_session(session_id, db, current)
    return load_session_details(db, sess)

@router.put("/{session_id}/exercises/{exercise_id}/sets", response_model=list[SetRead])
def record_sets(
    session_id: int,
    exercise_id: int,
    payload: SetsReplace,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
):
    """Replace everything recorded for one exercise of the session."""
    sess = _owned_session(session_id, db, current)
    if not ExerciseRepository(db).get(exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    repo = SetRepository(db)
    existing = repo.get_session_exercise(sess.id, exercise_id)
    if existing is None:
        order_index = len(SessionRepository(db).list_exercises([sess.id])) + 1
    else:
        order_index = existing.order_index
    se = repo.ensure_session_exercise(sess.id, exercise_id, order_index=order_index)
    saved = repo.replace_sets(se.id, [(s.reps, s.weight, s.partial_reps) for s in payload.sets])
    return number_sets(saved)

@router.post("/{session_id}/complete", response_model=SessionRead)
def complete_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    sess = _owned_session(session_id, db, current)
    if sess.completed:
        return sess
    return SessionRepository(db).complete(sess)

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    _owned_session(session_id, db, current)
    SessionRepository(db).delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
