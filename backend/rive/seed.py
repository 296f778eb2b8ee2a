"""Default exercise library; run ``python -m rive.seed`` against a fresh database."""
import logging

from sqlalchemy.orm import Session

from rive.repositories.exercise_repo import ExerciseRepository

log = logging.getLogger(__name__)

DEFAULT_EXERCISES: list[tuple[str, str]] = [
    ("Bench Press", "Chest"),
    ("Incline Bench Press", "Chest"),
    ("Dumbbell Fly", "Chest"),
    ("Push Up", "Chest"),
    ("Deadlift", "Back"),
    ("Barbell Row", "Back"),
    ("Pull Up", "Back"),
    ("Lat Pulldown", "Back"),
    ("Back Squat", "Legs"),
    ("Front Squat", "Legs"),
    ("Leg Press", "Legs"),
    ("Romanian Deadlift", "Legs"),
    ("Walking Lunge", "Legs"),
    ("Barbell Curl", "Biceps"),
    ("Hammer Curl", "Biceps"),
    ("Tricep Pushdown", "Triceps"),
    ("Skull Crusher", "Triceps"),
    ("Overhead Press", "Shoulders"),
    ("Lateral Raise", "Shoulders"),
]

def seed_exercise_library(db: Session) -> int:
    """Insert the default library if it is empty. Returns rows inserted."""
    repo = ExerciseRepository(db)
    if repo.count():
        return 0
    inserted = repo.add_many(DEFAULT_EXERCISES)
    log.info("seeded %d library exercises", inserted)
    return inserted

if __name__ == "__main__":
    from rive.db import SessionLocal

    logging.basicConfig(level=logging.INFO)
    with SessionLocal() as db:
        seed_exercise_library(db)
