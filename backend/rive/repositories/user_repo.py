# rive/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from rive.models import User
from rive.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(self, *, email: str, password_hash: str) -> User:
        user = User(email=email, password_hash=password_hash)
        try:
            return self.add_and_commit(user)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router can map to 400
            raise ValueError("email_already_exists")

    def update_profile(self, user_id: int, *, first_name: str, last_name: str) -> Optional[User]:
        user = self.get(user_id)
        if not user:
            return None
        user.first_name = first_name
        user.last_name = last_name
        self.db.commit()
        self.db.refresh(user)
        return user
