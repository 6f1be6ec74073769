"""
Shared test fixtures: SQLite test database, test client, history store.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from sitecalc.database import Base, get_db
from sitecalc.history import SqlHistoryStore
from sitecalc.main import app


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
def store(db):
    """History store on the test database."""
    return SqlHistoryStore(db)


@pytest.fixture
def scenario_a_inputs():
    """AAC block wall 5 x 3 x 0.1 m with one 1 x 2 m opening."""
    return {
        "brick_length": "600", "brick_width": "200", "brick_thickness": "100",
        "wall_length": "5", "wall_height": "3", "wall_thickness": "0.1",
        "w1": "1", "h1": "2", "w2": "", "h2": "", "w3": "", "h3": "",
    }


@pytest.fixture
def scenario_b_inputs():
    """Sand plaster 4 x 3 m, 12 mm thick, 1:6."""
    return {
        "length": "4", "width": "3", "thickness": "0.012",
        "cement_ratio": "1", "sand_ratio": "6",
    }
