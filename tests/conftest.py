"""Shared fixtures: in-memory SQLite database and API client"""
import os

# Must be set before app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, init_db
from app.main import app
from app.models import FamilyMember

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema per test"""
    init_db(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_member(db_session):
    """Insert a member directly and return its id"""
    def _make(first_name, last_name="Smith", gender="male", **fields):
        member = FamilyMember(first_name=first_name, last_name=last_name, gender=gender, **fields)
        db_session.add(member)
        db_session.commit()
        return member.id
    return _make


@pytest.fixture
def session_factory():
    """Sessions bound to the test database, for code that opens its own"""
    return TestingSessionLocal
