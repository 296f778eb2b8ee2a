from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from rive.schemas.exercise import ExerciseRead

WorkoutName = Annotated[str, Field(max_length=50)]
DescriptionStr = Annotated[str, Field(max_length=200)]
OrderIndex = Annotated[int, Field(ge=0)]

class WorkoutCreate(BaseModel):
    name: WorkoutName
    description: DescriptionStr | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("workout name cannot be blank")
        return v2

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

class WorkoutUpdate(BaseModel):
    # only fields present in the request are applied
    name: WorkoutName | None = None
    description: DescriptionStr | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str | None) -> str:
        v2 = (v or "").strip()
        if not v2:
            raise ValueError("workout name cannot be blank")
        return v2

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

class WorkoutRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}

class WorkoutSummary(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime
    exercise_count: int = 0

class WorkoutDetails(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime
    exercises: list[ExerciseRead]

class WorkoutDeleted(BaseModel):
    sessions_deleted: int

class TemplateExerciseAdd(BaseModel):
    exercise_id: int
    # omitted -> appended after the current last exercise
    order_index: OrderIndex | None = None

class ExerciseOrder(BaseModel):
    exercise_id: int
    order_index: OrderIndex

class TemplateReorder(BaseModel):
    orders: Annotated[list[ExerciseOrder], Field(min_length=1)]

class TemplateChangeRead(BaseModel):
    success: bool = True
    sessions_updated: int = 0
