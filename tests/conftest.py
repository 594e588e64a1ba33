"""Pytest fixtures for testing."""
import random
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.db.database import Base
from app.db.models import Player


@pytest.fixture(scope="function")
def test_db():
    """Create a test database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()

    yield db

    db.close()


@pytest.fixture
def test_player(test_db):
    """Create a test player."""
    player = Player(id="ems_test_player", score=0, operation="+")
    test_db.add(player)
    test_db.commit()
    return player


@pytest.fixture
def rng():
    """Seeded random source so generated questions are reproducible."""
    return random.Random(1234)


@pytest.fixture(scope="function")
def test_client():
    """Create a test client with in-memory database and rate limiting off."""
    from app.main import app
    from app.db.database import get_db
    from app.limiter import limiter

    # One shared connection so every thread sees the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter_was_enabled = limiter.enabled
    limiter.enabled = False

    client = TestClient(app)
    client.session_factory = TestingSessionLocal

    yield client

    limiter.enabled = limiter_was_enabled
    app.dependency_overrides.clear()
