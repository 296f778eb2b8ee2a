"""Resumable workout-logging form.

The form keeps the exercise being logged, its pending sets, the set inputs
being typed and the exercises already finished. Once opened, every mutation
rewrites the whole draft under one fixed storage key, so a later ``open``
resumes where the user left off. There is a single slot per user: opening a
new workout before finishing the previous one overwrites its draft.

In editing mode the form is filled from an existing session and never reads
or writes the draft slot.
"""
from __future__ import annotations
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from rive.models import WorkoutSession
from rive.repositories.session_repo import SessionRepository
from rive.repositories.set_repo import SetRepository
from rive.repositories.storage_repo import LocalStorage
from rive.schemas.draft import (
    CompletedExercise,
    ExerciseInWorkout,
    SetInput,
    WorkoutDraft,
)
from rive.schemas.session import SessionDetails

log = logging.getLogger(__name__)

DRAFT_KEY = "workoutProgress"
ACTIVE_WORKOUT_KEY = "workoutId"


class FormStateError(ValueError):
    """The requested change is not allowed in the form's current state."""


class SetValidationError(ValueError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("invalid set: " + ", ".join(sorted(errors)))
        self.errors = errors


def validate_set(reps: Optional[int], weight: Optional[float], partial_reps: Optional[int]) -> dict[str, str]:
    """Field-level messages for a set; empty when the set is acceptable."""
    errors: dict[str, str] = {}
    if reps is None:
        errors["reps"] = "Reps are required"
    elif reps <= 0:
        errors["reps"] = "Reps must be greater than 0"
    if weight is None:
        errors["weight"] = "Weight is required"
    elif weight <= 0:
        errors["weight"] = "Weight must be greater than 0"
    if partial_reps is not None and partial_reps < 0:
        errors["partial_reps"] = "Partial reps cannot be negative"
    return errors


# --- storage slots ---

def load_draft(storage: LocalStorage) -> WorkoutDraft:
    raw = storage.get_item(DRAFT_KEY)
    if raw is None:
        return WorkoutDraft()
    try:
        return WorkoutDraft.model_validate_json(raw)
    except ValidationError as e:
        log.error("Error parsing saved workout progress for user %s: %s", storage.user_id, e)
        return WorkoutDraft()

def save_draft(storage: LocalStorage, draft: WorkoutDraft) -> None:
    storage.set_item(DRAFT_KEY, draft.model_dump_json(by_alias=True))

def clear_draft(storage: LocalStorage) -> None:
    storage.remove_item(DRAFT_KEY)
    storage.remove_item(ACTIVE_WORKOUT_KEY)

def get_active_workout(storage: LocalStorage) -> Optional[int]:
    raw = storage.get_item(ACTIVE_WORKOUT_KEY)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        log.error("Ignoring unreadable active workout id %r for user %s", raw, storage.user_id)
        return None

def set_active_workout(storage: LocalStorage, workout_id: Optional[int]) -> None:
    if workout_id is None:
        storage.remove_item(ACTIVE_WORKOUT_KEY)
    else:
        storage.set_item(ACTIVE_WORKOUT_KEY, str(workout_id))


class WorkoutForm:
    def __init__(self, storage: LocalStorage, *, editing: bool = False):
        self.storage = storage
        self.editing = editing
        self.state = WorkoutDraft()
        # autosave starts only after the initial load
        self.initialized = False

    @classmethod
    def open(cls, storage: LocalStorage, *, editing: bool = False) -> "WorkoutForm":
        form = cls(storage, editing=editing)
        if not editing:
            form.state = load_draft(storage)
            form.initialized = True
        return form

    @classmethod
    def for_session(cls, storage: LocalStorage, details: SessionDetails) -> "WorkoutForm":
        form = cls(storage, editing=True)
        form.state = draft_from_session(details)
        return form

    def _changed(self) -> None:
        if self.initialized:
            save_draft(self.storage, self.state)

    def _check_index(self, items: list, index: int, what: str) -> None:
        if not 0 <= index < len(items):
            raise FormStateError(f"no {what} at position {index}")

    def has_unsaved_inputs(self) -> bool:
        s = self.state
        return bool(s.reps or s.weight or (s.partial_reps is not None and s.partial_reps > 0))

    # --- current exercise ---

    def select_exercise(self, exercise_id: int, name: str) -> None:
        if self.state.sets:
            raise FormStateError("finish the current exercise before selecting another")
        self.state.exercise_id = exercise_id
        self.state.exercise_name = name
        self._changed()

    def set_inputs(self, reps: Optional[int], weight: Optional[float], partial_reps: Optional[int]) -> None:
        self.state.reps = reps
        self.state.weight = weight
        self.state.partial_reps = partial_reps
        self._changed()

    def _clear_inputs(self) -> None:
        self.state.reps = None
        self.state.weight = None
        self.state.partial_reps = None

    # --- sets ---

    def add_set(self) -> SetInput:
        s = self.state
        errors = validate_set(s.reps, s.weight, s.partial_reps)
        if errors:
            raise SetValidationError(errors)
        if s.exercise_id is None:
            raise FormStateError("select an exercise first")
        new_set = SetInput(exercise_id=s.exercise_id, reps=s.reps, weight=s.weight, partial_reps=s.partial_reps or 0)
        s.sets.append(new_set)
        self._clear_inputs()
        self._changed()
        return new_set

    def update_set(self, index: int, reps: Optional[int], weight: Optional[float], partial_reps: Optional[int]) -> None:
        self._check_index(self.state.sets, index, "set")
        errors = validate_set(reps, weight, partial_reps)
        if errors:
            raise SetValidationError(errors)
        self.state.sets[index] = SetInput(
            exercise_id=self.state.exercise_id, reps=reps, weight=weight, partial_reps=partial_reps or 0,
        )
        self._changed()

    def delete_set(self, index: int) -> None:
        s = self.state
        self._check_index(s.sets, index, "set")
        del s.sets[index]
        if not s.sets and s.update_exercise_index is not None:
            # emptying an exercise under edit drops it from the workout
            editing = s.update_exercise_index
            s.update_exercise_index = None
            s.exercise_id = None
            s.exercise_name = ""
            self._clear_inputs()
            if editing < len(s.completed_sets):
                self._remove_finished(editing)
        self._changed()

    # --- finished exercises ---

    def add_exercise_to_workout(self) -> CompletedExercise:
        s = self.state
        if self.has_unsaved_inputs():
            raise FormStateError("add or clear the set being entered first")
        if s.exercise_id is None or not s.sets:
            raise FormStateError("log at least one set for the selected exercise")
        done = CompletedExercise(
            exercise_id=s.exercise_id,
            exercise_name=s.exercise_name,
            sets=[st.model_copy(update={"exercise_id": s.exercise_id, "partial_reps": st.partial_reps or 0})
                  for st in s.sets],
        )
        entry = ExerciseInWorkout(id=s.exercise_id, name=s.exercise_name)
        editing, s.update_exercise_index = s.update_exercise_index, None
        if editing is not None and editing < len(s.completed_sets):
            s.completed_sets[editing] = done
            if editing < len(s.exercises_in_workout):
                s.exercises_in_workout[editing] = entry
        else:
            s.completed_sets.append(done)
            s.exercises_in_workout.append(entry)
        s.sets = []
        s.exercise_id = None
        s.exercise_name = ""
        self._clear_inputs()
        self._changed()
        return done

    def edit_exercise(self, index: int) -> None:
        """Load a finished exercise's sets into the working slot.

        The exercise keeps its place in the list; finishing it again
        overwrites that entry.
        """
        s = self.state
        self._check_index(s.completed_sets, index, "exercise")
        if s.sets or self.has_unsaved_inputs():
            raise FormStateError("finish the current exercise before editing another")
        done = s.completed_sets[index]
        s.exercise_id = done.exercise_id
        s.exercise_name = done.exercise_name
        s.sets = [st.model_copy(update={"exercise_id": done.exercise_id, "partial_reps": st.partial_reps or 0})
                  for st in done.sets]
        s.update_exercise_index = index
        self._changed()

    def _remove_finished(self, index: int) -> None:
        s = self.state
        del s.completed_sets[index]
        if index < len(s.exercises_in_workout):
            del s.exercises_in_workout[index]
        editing = s.update_exercise_index
        if editing is not None:
            if editing == index:
                # the working copy becomes a new exercise
                s.update_exercise_index = None
            elif editing > index:
                s.update_exercise_index = editing - 1

    def delete_exercise(self, index: int) -> None:
        self._check_index(self.state.completed_sets, index, "exercise")
        self._remove_finished(index)
        self._changed()

    def discard(self) -> None:
        clear_draft(self.storage)
        self.state = WorkoutDraft()


def draft_from_session(details: SessionDetails) -> WorkoutDraft:
    completed = [
        CompletedExercise(
            exercise_id=p.exercise_id,
            exercise_name=p.exercise_name,
            sets=[
                SetInput(exercise_id=p.exercise_id, reps=st.reps, weight=st.weight, partial_reps=st.partial_reps or 0)
                for st in p.sets
            ],
        )
        for p in details.progress
        if p.sets
    ]
    return WorkoutDraft(
        completed_sets=completed,
        exercises_in_workout=[ExerciseInWorkout(id=c.exercise_id, name=c.exercise_name) for c in completed],
    )


def save_to_session(
    db: Session,
    storage: LocalStorage,
    draft: WorkoutDraft,
    *,
    user_id: int,
    workout_id: int,
    session: Optional[WorkoutSession] = None,
) -> WorkoutSession:
    """Write the finished exercises as a completed session, then clear the draft.

    Every draft entry becomes its own session exercise, so an exercise
    logged twice keeps both groups of sets. With ``session`` given, its
    exercises and sets are deleted and re-inserted instead of a new session
    being created.
    """
    for done in draft.completed_sets:
        for st in done.sets:
            errors = validate_set(st.reps, st.weight, st.partial_reps)
            if errors:
                raise SetValidationError(errors)

    sessions = SessionRepository(db)
    sets = SetRepository(db)
    if session is not None:
        sets.clear_session_exercises(session.id)
    sess = session or sessions.create_completed(user_id, workout_id)
    saved = 0
    for position, done in enumerate(draft.completed_sets, start=1):
        if done.exercise_id is None:
            continue
        se = sets.add_session_exercise(sess.id, done.exercise_id, order_index=position)
        sets.replace_sets(se.id, [(st.reps, st.weight, st.partial_reps or 0) for st in done.sets])
        saved += 1
    if session is not None and not sess.completed:
        sessions.complete(sess)

    clear_draft(storage)
    log.info("workout %s saved as session %s (%d exercises)", workout_id, sess.id, saved)
    db.refresh(sess)
    return sess
