"""Shape of the persisted in-progress workout form.

Serialized with camelCase keys: ``completedSets``, ``exerciseId``,
``exerciseName``, ``exercisesInWorkout``, ``reps``, ``weight``,
``partialReps``, ``sets``, plus ``updateExerciseIndex`` while a finished
exercise is being edited.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SetInput(_Camel):
    exercise_id: int | None = None
    reps: int | None = None
    weight: float | None = None
    partial_reps: int | None = None

class CompletedExercise(_Camel):
    exercise_id: int | None = None
    exercise_name: str = ""
    sets: list[SetInput] = []

class ExerciseInWorkout(BaseModel):
    id: int | None = None
    name: str

class WorkoutDraft(_Camel):
    completed_sets: list[CompletedExercise] = []
    exercise_id: int | None = None
    exercise_name: str = ""
    exercises_in_workout: list[ExerciseInWorkout] = []
    reps: int | None = None
    weight: float | None = None
    partial_reps: int | None = None
    sets: list[SetInput] = []
    # position in completed_sets being edited; finishing writes back there
    update_exercise_index: int | None = None

class ExerciseSelect(_Camel):
    exercise_id: int
    exercise_name: str | None = None

class SetFields(_Camel):
    reps: int | None = None
    weight: float | None = None
    partial_reps: int | None = None

class ActiveWorkout(_Camel):
    workout_id: int | None = None

class DraftSave(_Camel):
    workout_id: int
    # set when editing an existing session instead of logging a new one
    session_id: int | None = None
    draft: WorkoutDraft | None = None
