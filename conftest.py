import os
import threading
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

from db.database import Base  # noqa: E402
from db import models  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'daily_challenge.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_challenge(db):
    def _make(challenge_date=date(2025, 1, 1), language="en", word="apple", is_active=True):
        challenge = models.DailyChallenge(
            challenge_date=challenge_date,
            language=language,
            word=word,
            is_active=is_active,
        )
        db.add(challenge)
        db.commit()
        db.refresh(challenge)
        return challenge
    return _make


@pytest.fixture
def count_rows(session_factory):
    def _count(model):
        session = session_factory()
        try:
            return session.query(model).count()
        finally:
            session.close()
    return _count


@pytest.fixture
def run_in_threads():
    return _run_in_threads


def _run_in_threads(n, target):
    """Starts n threads on target(i) together and waits for all of them."""
    barrier = threading.Barrier(n)
    errors = []

    def runner(i):
        try:
            barrier.wait()
            target(i)
        except Exception as e:  # collected and asserted by the test
            errors.append(e)

    threads = [threading.Thread(target=runner, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors
