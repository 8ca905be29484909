"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

TEST_DB_PATH = Path(__file__).parent / "test.db"

# Use TEST_DATABASE_URL when given (e.g. PostgreSQL in Docker), SQLite otherwise
if os.getenv("TEST_DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.environ["TEST_DATABASE_URL"]
else:
    SQLALCHEMY_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# Settings are read on first import of src.database, so point them at the test database
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, create_engine_for  # noqa: E402
from src.services.migrations import MigrationRunner  # noqa: E402

engine = create_engine_for(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Migrate the test database to the newest revision once per session."""
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite") and TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

    MigrationRunner(SQLALCHEMY_DATABASE_URL).upgrade()
    yield
    engine.dispose()
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite") and TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture(scope="function")
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def sqlite_url(tmp_path):
    """URL of an empty SQLite database private to one test."""
    return f"sqlite:///{tmp_path / 'scratch.db'}"
