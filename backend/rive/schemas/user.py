from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime

NameStr = Annotated[str, Field(max_length=120)]

class UserRegister(BaseModel):
    email: EmailStr = Field(max_length=255)
    # no regex here, Pydantic v2 core regex doesn't support look-arounds
    password: Annotated[str, Field(min_length=12, max_length=128)]

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        # OWASP-ish: require lower, upper, digit, special
        if not any(c.islower() for c in v):
            raise ValueError("password must include a lowercase letter")
        if not any(c.isupper() for c in v):
            raise ValueError("password must include an uppercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("password must include a digit")
        if not any(not c.isalnum() for c in v):
            raise ValueError("password must include a special character")
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class ProfileUpdate(BaseModel):
    first_name: NameStr
    last_name: NameStr

    @field_validator("first_name", "last_name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class UserRead(BaseModel):
    id: int
    email: EmailStr
    first_name: str | None = None
    last_name: str | None = None
    profile_complete: bool
    created_at: datetime
    model_config = {"from_attributes": True}
