# tests/conftest.py
import os

# keep the app's default engine off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from brandpipe.main import app
from brandpipe.db import Base, get_db
from brandpipe import models  # noqa: F401  (registers tables)
from brandpipe import store
from brandpipe.normalizers import BrandNormalizer, RecordingReporter


# --- Temporary SQLite DB file per test ---
@pytest.fixture
def tmp_db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'brands.db'}"


@pytest.fixture
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def normalizer(reporter):
    # pinned so the year boundaries don't move under the tests
    return BrandNormalizer(reporter=reporter, current_year=2024)


@pytest.fixture
def seed_sample(db_session):
    """
    Three canonical brands already in the "brands" collection:
      - B001 oldest (1600), single location
      - B002 mid-century, largest chain
      - B003 most recent
    """
    store.insert_many(db_session, "brands", [
        {"_id": "B001", "brandName": "Old Mill", "yearFounded": 1600,
         "headquarters": "York", "numberOfLocations": 1},
        {"_id": "B002", "brandName": "Mega Mart", "yearFounded": 1962,
         "headquarters": "Bentonville", "numberOfLocations": 10500},
        {"_id": "B003", "brandName": "New Wave", "yearFounded": 2015,
         "headquarters": "Austin", "numberOfLocations": 12},
    ])
    db_session.commit()
