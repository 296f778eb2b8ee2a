from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from rive.db import get_db
from rive.deps.auth import get_current_user
from rive.models import User
from rive.repositories.user_repo import UserRepository
from rive.schemas.user import ProfileUpdate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserRead)
def get_profile(current: User = Depends(get_current_user)):
    return current

@router.put("/me/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    """Complete the profile after sign-up, or edit it later."""
    user = UserRepository(db).update_profile(
        current.id, first_name=payload.first_name, last_name=payload.last_name
    )
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
