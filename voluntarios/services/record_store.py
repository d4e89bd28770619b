"""Volunteer records kept as one JSON snapshot in a key-value slot."""

from __future__ import annotations

import json
import uuid
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from ..core.config import settings
from ..core.logging import logger
from .kv_store import KeyValueStore


class VolunteerRecord(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    address: str

    @classmethod
    def create(cls, name: str, email: str, address: str) -> "VolunteerRecord":
        return cls(id=uuid.uuid4().hex, name=name, email=email, address=address)


class RecordStore:
    """
    Every operation reloads the snapshot, mutates it and writes it back.
    There is no in-memory cache and no locking around load -> save.
    """

    def __init__(self, kv: KeyValueStore, key: Optional[str] = None):
        self.kv = kv
        self.key = key or settings.volunteers_key

    def load_all(self) -> List[VolunteerRecord]:
        raw = self.kv.get(self.key)
        if raw is None or not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"[store] corrupt snapshot in '{self.key}', treating as empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"[store] snapshot in '{self.key}' is not a list, treating as empty")
            return []

        records = []
        for position, item in enumerate(data):
            record = self._parse_item(item)
            if record is None:
                logger.warning(
                    f"[store] invalid entry at position {position} in '{self.key}' "
                    f"is skipped and will be dropped on the next write: {item!r}"
                )
                continue
            records.append(record)
        return records

    def save_all(self, records: List[VolunteerRecord]) -> None:
        payload = [record.model_dump() for record in records]
        self.kv.set(self.key, json.dumps(payload, ensure_ascii=False))

    def append(self, record: VolunteerRecord) -> VolunteerRecord:
        records = self.load_all()
        records.append(record)
        self.save_all(records)
        logger.info(f"[store] appended id={record.id} total={len(records)}")
        return record

    def remove_at(self, index: int) -> Optional[VolunteerRecord]:
        records = self.load_all()
        if index < 0 or index >= len(records):
            logger.info(f"[store] remove_at({index}) out of bounds, ignoring")
            return None
        removed = records.pop(index)
        self.save_all(records)
        logger.info(f"[store] removed position={index} total={len(records)}")
        return removed

    def remove_by_id(self, record_id: str) -> Optional[VolunteerRecord]:
        records = self.load_all()
        for position, record in enumerate(records):
            if record.id == record_id:
                del records[position]
                self.save_all(records)
                logger.info(f"[store] removed id={record_id} total={len(records)}")
                return record
        return None

    def clear_all(self) -> None:
        self.kv.remove(self.key)
        logger.info(f"[store] cleared '{self.key}'")

    def email_exists(self, email: str) -> bool:
        wanted = (email or "").strip().lower()
        return any(record.email.strip().lower() == wanted for record in self.load_all())

    @staticmethod
    def _parse_item(item: Any) -> Optional[VolunteerRecord]:
        if not isinstance(item, dict):
            return None
        try:
            return VolunteerRecord.model_validate(item)
        except ValidationError:
            return None
