"""Most-recently-picked exercises, kept in the user's local storage."""
from __future__ import annotations
import logging

from pydantic import TypeAdapter, ValidationError

from rive.repositories.storage_repo import LocalStorage
from rive.schemas.exercise import ExerciseRead
from rive.settings import get_settings

log = logging.getLogger(__name__)

RECENT_KEY = "recentExercises"
_adapter = TypeAdapter(list[ExerciseRead])

def recent_exercises(storage: LocalStorage) -> list[ExerciseRead]:
    raw = storage.get_item(RECENT_KEY)
    if raw is None:
        return []
    try:
        return _adapter.validate_json(raw)
    except ValidationError as e:
        log.error("Failed to load recent exercises for user %s: %s", storage.user_id, e)
        return []

def remember_exercise(storage: LocalStorage, exercise: ExerciseRead, limit: int | None = None) -> list[ExerciseRead]:
    limit = limit or get_settings().RECENT_EXERCISES_LIMIT
    updated = [exercise] + [e for e in recent_exercises(storage) if e.id != exercise.id]
    updated = updated[:limit]
    storage.set_item(RECENT_KEY, _adapter.dump_json(updated).decode())
    return updated
