from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from rive.db import get_db
from rive.deps.auth import require_complete_profile, get_storage
from rive.models import User
from rive.repositories.exercise_repo import ExerciseRepository
from rive.repositories.storage_repo import LocalStorage
from rive.schemas.exercise import ExerciseRead
from rive.services.recent import recent_exercises
from rive.settings import get_settings

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def search_exercises(
    db: Session = Depends(get_db),
    _current: User = Depends(require_complete_profile),
    search: str = Query("", max_length=120),
    category: str = Query("", max_length=60),
    exclude: list[int] = Query(default=[]),
    limit: int | None = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = ExerciseRepository(db).search(
        search.strip(),
        category=category,
        exclude=exclude,
        limit=limit or get_settings().EXERCISE_SEARCH_LIMIT,
        offset=offset,
    )
    return page.items

@router.get("/favorites", response_model=list[ExerciseRead])
def list_favorites(db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    return ExerciseRepository(db).list_favorites(current.id)

@router.get("/recent", response_model=list[ExerciseRead])
def list_recent(storage: LocalStorage = Depends(get_storage)):
    return recent_exercises(storage)

@router.put("/{exercise_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
def add_favorite(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    repo = ExerciseRepository(db)
    if not repo.get(exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    repo.add_favorite(current.id, exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{exercise_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(require_complete_profile)):
    ExerciseRepository(db).remove_favorite(current.id, exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
