from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime

from .base import Base


class KeyValueEntry(Base):
    """One string slot of the key-value store (the old localStorage)."""

    __tablename__ = "key_value_entries"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, index=True, nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
