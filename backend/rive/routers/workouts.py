from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from rive.db import get_db
from rive.deps.auth import require_complete_profile
from rive.models import User, Workout
from rive.repositories.exercise_repo import ExerciseRepository
from rive.repositories.workout_repo import WorkoutRepository
from rive.schemas.workout import (
    TemplateChangeRead,
    TemplateExerciseAdd,
    TemplateReorder,
    WorkoutCreate,
    WorkoutDeleted,
    WorkoutDetails,
    WorkoutRead,
    WorkoutSummary,
    WorkoutUpdate,
)
from rive.services import template_sync
from rive.services.aggregation import load_workout_details

router = APIRouter(prefix="/workouts", tags=["workouts"])

def _owned_workout(workout_id: int, db: Session, current: User) -> Workout:
    workout = WorkoutRepository(db).get_owned(workout_id, current.id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout

@router.get("", response_model=list[WorkoutSummary])
def list_workouts(db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    rows = WorkoutRepository(db).list_with_counts(current.id)
    return [
        WorkoutSummary(
            id=w.id, name=w.name, description=w.description, created_at=w.created_at, exercise_count=count
        )
        for w, count in rows
    ]

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    return WorkoutRepository(db).create(current.id, name=payload.name, description=payload.description)

@router.get("/{workout_id}", response_model=WorkoutDetails)
def get_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    workout = _owned_workout(workout_id, db, current)
    return load_workout_details(db, workout)

@router.patch("/{workout_id}", response_model=WorkoutRead)
def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
):
    workout = _owned_workout(workout_id, db, current)
    return WorkoutRepository(db).update(workout, **payload.model_dump(exclude_unset=True))

@router.delete("/{workout_id}", response_model=WorkoutDeleted)
def delete_workout(workout_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    _owned_workout(workout_id, db, current)
    deleted = template_sync.delete_template(db, workout_id)
    return WorkoutDeleted(sessions_deleted=deleted)

# Template exercises: every change is mirrored into in-progress sessions

@router.post("/{workout_id}/exercises", response_model=TemplateChangeRead, status_code=status.HTTP_201_CREATED)
def add_template_exercise(
    workout_id: int,
    payload: TemplateExerciseAdd,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
):
    _owned_workout(workout_id, db, current)
    if not ExerciseRepository(db).get(payload.exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    if WorkoutRepository(db).has_exercise(workout_id, payload.exercise_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Exercise already in workout")
    result = template_sync.add_exercise_to_template(db, workout_id, payload.exercise_id, payload.order_index)
    return TemplateChangeRead(sessions_updated=result.sessions_updated)

@router.delete("/{workout_id}/exercises/{exercise_id}", response_model=TemplateChangeRead)
def remove_template_exercise(
    workout_id: int,
    exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
):
    _owned_workout(workout_id, db, current)
    result = template_sync.remove_exercise_from_template(db, workout_id, exercise_id)
    return TemplateChangeRead(sessions_updated=result.sessions_updated)

@router.put("/{workout_id}/exercises/order", response_model=TemplateChangeRead)
def reorder_template_exercises(
    workout_id: int,
    payload: TemplateReorder,
    db: Session = Depends(get_db),
    current: User = Depends(require_complete_profile),
):
    _owned_workout(workout_id, db, current)
    result = template_sync.reorder_template_exercises(db, workout_id, payload.orders)
    return TemplateChangeRead(sessions_updated=result.sessions_updated)
