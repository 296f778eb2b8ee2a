from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from rive.db import get_db
from rive.deps.auth import require_complete_profile, get_storage
from rive.models import User
from rive.repositories.exercise_repo import ExerciseRepository
from rive.repositories.session_repo import SessionRepository
from rive.repositories.storage_repo import LocalStorage
from rive.repositories.workout_repo import WorkoutRepository
from rive.schemas.draft import ActiveWorkout, DraftSave, ExerciseSelect, SetFields, WorkoutDraft
from rive.schemas.exercise import ExerciseRead
from rive.schemas.session import SessionDetails
from rive.services.aggregation import load_session_details
from rive.services.recent import remember_exercise
from rive.services.workout_form import (
    FormStateError,
    SetValidationError,
    WorkoutForm,
    get_active_workout,
    save_draft,
    save_to_session,
    set_active_workout,
)

router = APIRouter(prefix="/drafts", tags=["drafts"])

def _apply(form: WorkoutForm, change, *args) -> WorkoutDraft:
    try:
        change(*args)
    except SetValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except FormStateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return form.state

@router.get("/workout", response_model=WorkoutDraft)
def get_draft(
    editing: bool = Query(False),
    session_id: int | None = Query(None),
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
    storage: LocalStorage = Depends(get_storage),
):
    """Resume the stored draft, or load a saved session for editing (no storage involved)."""
    if session_id is not None:
        sess = SessionRepository(db).get_owned(session_id, current.id)
        if not sess:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
        return WorkoutForm.for_session(storage, load_session_details(db, sess)).state
    return WorkoutForm.open(storage, editing=editing).state

@router.put("/workout", response_model=WorkoutDraft)
def put_draft(payload: WorkoutDraft, storage: LocalStorage = Depends(get_storage)):
    save_draft(storage, payload)
    return payload

@router.delete("/workout", status_code=status.HTTP_204_NO_CONTENT)
def discard_draft(storage: LocalStorage = Depends(get_storage)):
    WorkoutForm.open(storage).discard()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.put("/workout/exercise", response_model=WorkoutDraft)
def select_exercise(payload: ExerciseSelect, db: Session = Depends(get_db), storage: LocalStorage = Depends(get_storage)):
    exercise = ExerciseRepository(db).get(payload.exercise_id)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    form = WorkoutForm.open(storage)
    state = _apply(form, form.select_exercise, exercise.id, payload.exercise_name or exercise.name)
    remember_exercise(storage, ExerciseRead.model_validate(exercise))
    return state

@router.put("/workout/inputs", response_model=WorkoutDraft)
def set_inputs(payload: SetFields, storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.set_inputs, payload.reps, payload.weight, payload.partial_reps)

@router.post("/workout/sets", response_model=WorkoutDraft, status_code=status.HTTP_201_CREATED)
def add_set(storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.add_set)

@router.put("/workout/sets/{index}", response_model=WorkoutDraft)
def update_set(index: int, payload: SetFields, storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.update_set, index, payload.reps, payload.weight, payload.partial_reps)

@router.delete("/workout/sets/{index}", response_model=WorkoutDraft)
def delete_set(index: int, storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.delete_set, index)

@router.post("/workout/exercises", response_model=WorkoutDraft, status_code=status.HTTP_201_CREATED)
def add_exercise_to_workout(storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.add_exercise_to_workout)

@router.post("/workout/exercises/{index}/edit", response_model=WorkoutDraft)
def edit_exercise(index: int, storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.edit_exercise, index)

@router.delete("/workout/exercises/{index}", response_model=WorkoutDraft)
def delete_exercise(index: int, storage: LocalStorage = Depends(get_storage)):
    form = WorkoutForm.open(storage)
    return _apply(form, form.delete_exercise, index)

@router.post("/workout/save", response_model=SessionDetails, status_code=status.HTTP_201_CREATED)
def save_workout(
    payload: DraftSave,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
    storage: LocalStorage = Depends(get_storage),
):
    if not WorkoutRepository(db).get_owned(payload.workout_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    session = None
    if payload.session_id is not None:
        session = SessionRepository(db).get_owned(payload.session_id, current.id)
        if not session or session.workout_id != payload.workout_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    draft = payload.draft if payload.draft is not None else WorkoutForm.open(storage).state
    if not draft.completed_sets:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No exercises to save")
    try:
        sess = save_to_session(
            db, storage, draft, user_id=current.id, workout_id=payload.workout_id, session=session
        )
    except SetValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    return load_session_details(db, sess)

@router.get("/active-workout", response_model=ActiveWorkout)
def read_active_workout(storage: LocalStorage = Depends(get_storage)):
    return ActiveWorkout(workout_id=get_active_workout(storage))

@router.put("/active-workout", response_model=ActiveWorkout)
def write_active_workout(
    payload: ActiveWorkout,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
    storage: LocalStorage = Depends(get_storage),
):
    if payload.workout_id is not None and not WorkoutRepository(db).get_owned(payload.workout_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    set_active_workout(storage, payload.workout_id)
    return payload
