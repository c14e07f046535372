"""
Shared test fixtures — SQLite test database, test client, rate tables.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SEED_DEFAULTS"] = "false"

from glasspos.database import Base, get_db
from glasspos.main import app
from glasspos.rate_table import RateTable, ThicknessTier


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def rate_table():
    """
    Small in-memory table:
    KHARZAN  [0, 3.0] @ 5.0, [3.1, 4.0] @ 7.0, [4.1, 10] @ 9.0
    SANDING  [0, ∞)  @ 20.0 per m²
    """
    return RateTable({
        "KHARZAN": [
            ThicknessTier(min_mm="0", max_mm="3.0", rate_per_meter="5.0"),
            ThicknessTier(min_mm="3.1", max_mm="4.0", rate_per_meter="7.0"),
            ThicknessTier(min_mm="4.1", max_mm="10", rate_per_meter="9.0"),
        ],
        "SANDING": [
            ThicknessTier(min_mm="0", max_mm=None, rate_per_meter="20.0"),
        ],
    })
