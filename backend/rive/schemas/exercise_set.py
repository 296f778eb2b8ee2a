from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field

PosInt = Annotated[int, Field(ge=1)]
PosFloat = Annotated[float, Field(gt=0, le=10000)]
NonNegInt = Annotated[int, Field(ge=0)]

class SetCreate(BaseModel):
    reps: PosInt
    weight: PosFloat
    partial_reps: NonNegInt = 0

class SetsReplace(BaseModel):
    sets: list[SetCreate]

class SetRead(BaseModel):
    id: int
    reps: int
    weight: float
    partial_reps: int = 0
    created_at: datetime | None = None
    # presentation index, not stored
    set_number: int

    model_config = {"from_attributes": True}
