from typing import Literal
from datetime import datetime
from pydantic import BaseModel

from rive.schemas.exercise import ExerciseRead
from rive.schemas.exercise_set import SetRead

Period = Literal["week", "month", "all"]

class SessionStart(BaseModel):
    workout_id: int

class SessionRead(BaseModel):
    id: int
    user_id: int
    workout_id: int
    started_at: datetime
    ended_at: datetime | None = None
    completed: bool

    model_config = {"from_attributes": True}

class SessionSummary(BaseModel):
    id: int
    workout_id: int
    name: str
    started_at: datetime
    completed: bool

class ExerciseProgress(BaseModel):
    exercise_id: int
    exercise_name: str
    sets: list[SetRead] = []
    completed: bool = False

class SessionDetails(BaseModel):
    id: int
    workout_id: int
    workout_name: str
    started_at: datetime
    ended_at: datetime | None = None
    completed: bool
    exercises: list[ExerciseRead]
    progress: list[ExerciseProgress]
