import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from voluntarios.db.base import Base
from voluntarios.db import models  # noqa: F401
from voluntarios.db.session import get_db
from voluntarios.main import app
from voluntarios.services.kv_store import KeyValueStore
from voluntarios.services.record_store import RecordStore
from voluntarios.services.viacep import viacep_service


SE_PAYLOAD = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
}


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def kv(db):
    return KeyValueStore(db)


@pytest.fixture
def store(kv):
    return RecordStore(kv)


@pytest.fixture
def lookups():
    """Routes ViaCEP calls to a dict keyed by CEP; records every CEP asked for."""
    responses = {"01001000": SE_PAYLOAD}
    calls = []

    def fake_fetch(cep):
        calls.append(cep)
        if cep not in responses:
            return {"erro": True}
        return responses[cep]

    previous = viacep_service.set_fetcher_override(fake_fetch)
    try:
        yield responses, calls
    finally:
        viacep_service.set_fetcher_override(previous)


@pytest.fixture
def client(db, lookups):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
