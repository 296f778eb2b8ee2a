import logging
import uuid
import pytest

from rive.repositories.storage_repo import LocalStorage
from rive.repositories.user_repo import UserRepository
from rive.schemas.draft import WorkoutDraft
from rive.services.workout_form import (
    ACTIVE_WORKOUT_KEY,
    DRAFT_KEY,
    FormStateError,
    SetValidationError,
    WorkoutForm,
    set_active_workout,
    get_active_workout,
    validate_set,
)


@pytest.fixture
def storage(db):
    user = UserRepository(db).create(email=f"{uuid.uuid4().hex[:10]}@ex.com", password_hash="")
    return LocalStorage(db, user.id)

def log_bench(form):
    form.select_exercise(1, "Bench Press")
    form.set_inputs(5, 100.0, None)
    form.add_set()
    form.set_inputs(3, 100.0, 2)
    form.add_set()


def test_empty_storage_opens_empty(storage):
    assert WorkoutForm.open(storage).state == WorkoutDraft()

def test_restart_restores_every_field(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    form.add_exercise_to_workout()
    form.select_exercise(2, "Incline Bench Press")
    form.set_inputs(8, 60.0, 1)

    resumed = WorkoutForm.open(storage)
    assert resumed.state == form.state
    assert resumed.state.reps == 8
    assert resumed.state.completed_sets[0].sets[1].partial_reps == 2

def test_draft_stored_with_camel_case_keys(storage):
    form = WorkoutForm.open(storage)
    form.select_exercise(1, "Bench Press")
    raw = storage.get_item(DRAFT_KEY)
    for key in ("completedSets", "exerciseId", "exerciseName", "exercisesInWorkout", "partialReps"):
        assert f'"{key}"' in raw

def test_unreadable_draft_falls_back_to_empty(storage, caplog):
    storage.set_item(DRAFT_KEY, "{not json")
    with caplog.at_level(logging.ERROR, logger="rive.services.workout_form"):
        form = WorkoutForm.open(storage)
    assert form.state == WorkoutDraft()
    assert caplog.records

def test_editing_mode_skips_storage(storage):
    WorkoutForm.open(storage).select_exercise(1, "Bench Press")
    form = WorkoutForm.open(storage, editing=True)
    assert form.state == WorkoutDraft()
    form.select_exercise(2, "Deadlift")
    assert WorkoutForm.open(storage).state.exercise_id == 1

def test_validate_set_messages():
    assert validate_set(None, None, None) == {"reps": "Reps are required", "weight": "Weight is required"}
    assert validate_set(5, 20.0, -1) == {"partial_reps": "Partial reps cannot be negative"}
    assert validate_set(5, 20.0, None) == {}

def test_validate_set_zero_is_out_of_range():
    assert validate_set(0, 0, 0) == {
        "reps": "Reps must be greater than 0",
        "weight": "Weight must be greater than 0",
    }
    assert validate_set(-2, 10.0, None) == {"reps": "Reps must be greater than 0"}

def test_invalid_set_is_not_stored(storage):
    form = WorkoutForm.open(storage)
    form.select_exercise(1, "Bench Press")
    form.set_inputs(None, 50.0, None)
    with pytest.raises(SetValidationError) as exc:
        form.add_set()
    assert exc.value.errors == {"reps": "Reps are required"}
    assert WorkoutForm.open(storage).state.sets == []

def test_add_set_without_exercise_refused(storage):
    form = WorkoutForm.open(storage)
    form.set_inputs(5, 50.0, 0)
    with pytest.raises(FormStateError):
        form.add_set()

def test_update_and_delete_set(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    form.update_set(0, 6, 105.0, None)
    assert form.state.sets[0].reps == 6
    with pytest.raises(SetValidationError):
        form.update_set(0, 6, None, None)
    form.delete_set(1)
    assert len(WorkoutForm.open(storage).state.sets) == 1
    with pytest.raises(FormStateError):
        form.delete_set(5)

def test_finish_exercise_refused_with_unsaved_inputs(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    form.set_inputs(4, None, None)
    with pytest.raises(FormStateError):
        form.add_exercise_to_workout()

def test_select_refused_while_sets_pending(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    with pytest.raises(FormStateError):
        form.select_exercise(2, "Incline Bench Press")

def finish(form, ex_id, name, reps=5, weight=50.0):
    form.select_exercise(ex_id, name)
    form.set_inputs(reps, weight, None)
    form.add_set()
    form.add_exercise_to_workout()

def test_edited_exercise_keeps_its_position(storage):
    form = WorkoutForm.open(storage)
    finish(form, 1, "Bench Press")
    finish(form, 2, "Incline Bench Press")
    finish(form, 3, "Dumbbell Fly")

    form.edit_exercise(0)
    assert form.state.exercise_id == 1
    assert form.state.update_exercise_index == 0
    # still listed while being edited
    assert [c.exercise_id for c in form.state.completed_sets] == [1, 2, 3]

    form.set_inputs(3, 70.0, 1)
    form.add_set()
    form.add_exercise_to_workout()

    resumed = WorkoutForm.open(storage).state
    assert [c.exercise_id for c in resumed.completed_sets] == [1, 2, 3]
    assert [e.id for e in resumed.exercises_in_workout] == [1, 2, 3]
    assert [s.reps for s in resumed.completed_sets[0].sets] == [5, 3]
    assert resumed.update_exercise_index is None

def test_emptying_an_edited_exercise_removes_it(storage):
    form = WorkoutForm.open(storage)
    finish(form, 1, "Bench Press")
    finish(form, 2, "Incline Bench Press")
    form.edit_exercise(1)
    form.delete_set(0)
    assert form.state.update_exercise_index is None
    assert form.state.exercise_id is None
    assert [c.exercise_id for c in form.state.completed_sets] == [1]

def test_deleting_an_earlier_exercise_shifts_the_edit_slot(storage):
    form = WorkoutForm.open(storage)
    finish(form, 1, "Bench Press")
    finish(form, 2, "Incline Bench Press")
    form.edit_exercise(1)
    form.delete_exercise(0)
    assert form.state.update_exercise_index == 0
    form.add_exercise_to_workout()
    assert [c.exercise_id for c in form.state.completed_sets] == [2]

def test_same_exercise_can_be_logged_twice(storage):
    form = WorkoutForm.open(storage)
    finish(form, 1, "Bench Press", reps=5, weight=100.0)
    finish(form, 1, "Bench Press", reps=8, weight=60.0)
    assert [[s.reps for s in c.sets] for c in form.state.completed_sets] == [[5], [8]]

def test_delete_exercise(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    form.add_exercise_to_workout()
    form.delete_exercise(0)
    resumed = WorkoutForm.open(storage).state
    assert resumed.completed_sets == []
    assert resumed.exercises_in_workout == []

def test_discard_clears_draft_and_active_workout(storage):
    form = WorkoutForm.open(storage)
    log_bench(form)
    set_active_workout(storage, 12)
    assert get_active_workout(storage) == 12
    form.discard()
    assert storage.get_item(DRAFT_KEY) is None
    assert storage.get_item(ACTIVE_WORKOUT_KEY) is None
