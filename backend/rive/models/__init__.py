from rive.models.user import User
from rive.models.workout import Workout, WorkoutExercise
from rive.models.exercise import LibraryExercise, FavoriteExercise
from rive.models.session import WorkoutSession, SessionExercise
from rive.models.exercise_set import ExerciseSet
from rive.models.stored_value import StoredValue

__all__ = [
    "User",
    "Workout",
    "WorkoutExercise",
    "LibraryExercise",
    "FavoriteExercise",
    "WorkoutSession",
    "SessionExercise",
    "ExerciseSet",
    "StoredValue",
]
