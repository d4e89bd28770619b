"""
Optional seed data for development and demonstration.
Run this to populate the registry with sample volunteers.

Usage:
    cd /path/to/project
    python -m voluntarios.db.seed
"""

from typing import Optional

from sqlalchemy.orm import Session

from .base import Base
from .session import SessionLocal, engine
from . import models  # noqa: F401
from ..services.kv_store import KeyValueStore
from ..services.record_store import RecordStore, VolunteerRecord


SAMPLE_VOLUNTEERS = [
    {
        "name": "Ana Souza",
        "email": "ana.souza@example.com",
        "address": "Praça da Sé, Sé, São Paulo - SP",
    },
    {
        "name": "Bruno Lima",
        "email": "bruno.lima@example.com",
        "address": "Avenida Paulista, Bela Vista, São Paulo - SP",
    },
    {
        "name": "Carla Mendes",
        "email": "carla.mendes@example.com",
        "address": "Rua da Assembleia, Centro, Rio de Janeiro - RJ",
    },
]


def seed_sample_data(db: Optional[Session] = None) -> int:
    """Seed the registry with sample volunteers. Returns how many were added."""
    owns_session = db is None
    if owns_session:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()

    try:
        store = RecordStore(KeyValueStore(db))
        if store.load_all():
            print("Registry already has data, skipping seed.")
            return 0

        records = [VolunteerRecord.create(**data) for data in SAMPLE_VOLUNTEERS]
        store.save_all(records)
        print(f"✅ Successfully seeded {len(records)} sample volunteers")
        return len(records)

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding data: {e}")
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_sample_data()
