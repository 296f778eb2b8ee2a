from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Session
from rive.models import StoredValue

class LocalStorage:
    """String-keyed get/set/remove over one user's ``local_storage`` rows.

    Values are opaque strings (JSON blobs); writes overwrite without versioning.
    """
    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def get_item(self, key: str) -> Optional[str]:
        row = self.db.get(StoredValue, (self.user_id, key))
        return row.value if row else None

    def set_item(self, key: str, value: str) -> None:
        row = self.db.get(StoredValue, (self.user_id, key))
        if row is None:
            self.db.add(StoredValue(user_id=self.user_id, key=key, value=value))
        else:
            row.value = value
        self.db.commit()

    def remove_item(self, key: str) -> None:
        row = self.db.get(StoredValue, (self.user_id, key))
        if row is not None:
            self.db.delete(row)
            self.db.commit()
