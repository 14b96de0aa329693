import os

# Must be set before evalcycle.core.config builds its Settings
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import evalcycle.models  # noqa: F401  (populate Base.metadata)
from evalcycle.main import app
from evalcycle.db.base import Base
from evalcycle.db.session import enable_sqlite_foreign_keys, get_db
from evalcycle.core.config import settings


def _make_engine():
    if settings.is_sqlite:
        # one shared in-memory database; TestClient calls in from another thread
        return enable_sqlite_foreign_keys(
            create_engine(
                settings.DATABASE_URL,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        )
    return create_engine(settings.DATABASE_URL, pool_pre_ping=True)


@pytest.fixture()
def engine():
    """
    Fresh schema per test. Engine code commits and rolls back on its own, so
    tests run against real transactions instead of an outer savepoint.
    """
    engine = _make_engine()
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_get_db(request):
    if "db_session" not in request.fixturenames:
        yield
        return

    db_session = request.getfixturevalue("db_session")

    def _get_db_override():
        yield db_session

    app.dependency_overrides[get_db] = _get_db_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_session) -> TestClient:
    return TestClient(app)
