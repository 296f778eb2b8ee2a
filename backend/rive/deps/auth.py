# rive/deps/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from rive.db import get_db
from rive.models import User
from rive.repositories.storage_repo import LocalStorage
from rive.security import decode_token

# Exposes Bearer auth in Swagger; login endpoint issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    """The signed-in user for this request, resolved from the bearer token."""
    unauth = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        sub = payload.get("sub")
        if sub is None:
            raise unauth
        user = db.get(User, int(sub))
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except (JWTError, ValueError):
        raise unauth

    if not user:
        raise unauth
    return user

def require_complete_profile(current_user: User = Depends(get_current_user)) -> User:
    """
    Usage: current: User = Depends(require_complete_profile)

    Signed-in users must finish their profile (first + last name) before
    touching workouts, sessions or drafts.
    """
    if not current_user.profile_complete:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Profile incomplete")
    return current_user

def get_storage(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_complete_profile),
) -> LocalStorage:
    return LocalStorage(db, current_user.id)
