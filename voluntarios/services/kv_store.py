from typing import Optional

from sqlalchemy.orm import Session

from ..db import models


class KeyValueStore:
    """String-keyed slots persisted in the database, one row per key."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self._row(key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self._row(key)
        if row:
            row.value = value
        else:
            self.db.add(models.KeyValueEntry(key=key, value=value))
        self.db.commit()

    def remove(self, key: str) -> None:
        row = self._row(key)
        if row:
            self.db.delete(row)
            self.db.commit()

    def _row(self, key: str) -> Optional[models.KeyValueEntry]:
        return self.db.query(models.KeyValueEntry).filter(
            models.KeyValueEntry.key == key
        ).first()
