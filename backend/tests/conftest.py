from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from app.config import Settings
from app.db.base import Base
from app.db.database import build_engine
from app.main import create_app
from app.models.transcription import Transcription
from tests.factories import FRONTEND_ORIGIN


@pytest.fixture
def settings() -> Settings:
    test_settings = Settings()
    test_settings.FRONTEND_URL = FRONTEND_ORIGIN
    test_settings.DB_POOL_SIZE = 2
    return test_settings


@pytest.fixture
def engine(tmp_path, settings):
    engine = build_engine(f"sqlite:///{tmp_path / 'gateway.db'}", pool_size=settings.DB_POOL_SIZE)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seed(engine):
    def _seed(*rows: dict) -> None:
        with engine.begin() as conn:
            conn.execute(insert(Transcription), list(rows))

    return _seed


@pytest.fixture
def client(engine, settings):
    app = create_app(settings=settings, engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_client(tmp_path, settings):
    """Client whose database file can never be opened."""
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'gateway.db'}", pool_size=settings.DB_POOL_SIZE)
    app = create_app(settings=settings, engine=engine)
    with TestClient(app) as test_client:
        yield test_client
