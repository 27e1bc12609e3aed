import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from hospital_api.config import Settings
from hospital_api.database import create_db_and_tables, create_db_engine
from hospital_api.main import create_app


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        RATE_LIMIT_ENABLED=False,
        SEED_ON_STARTUP=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine(test_settings):
    engine = create_db_engine(config=test_settings)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(test_settings, engine):
    app = create_app(config=test_settings, engine=engine)
    with TestClient(app) as c:
        yield c
