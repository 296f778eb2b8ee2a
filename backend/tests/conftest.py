"""
Point the app at a throwaway in-memory SQLite database. Runs before any
test module imports rive, so settings and the engine pick it up.
"""
import os

os.environ.setdefault("DB_URL", "sqlite+pysqlite:///:memory:")

import pytest

from rive.db import Base, SessionLocal, engine
from rive import models  # noqa: F401  # registers every table on Base.metadata
from rive.seed import seed_exercise_library


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.create_all(engine)
    with SessionLocal() as db:
        seed_exercise_library(db)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
