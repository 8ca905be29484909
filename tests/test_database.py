"""Tests for session helpers."""

import pytest
from sqlalchemy import func, select, text

from src.database import get_db, session_scope
from src.errors import UniqueViolationError
from src.models import Game, User


def test_get_db_yields_usable_session():
    sessions = get_db()
    session = next(sessions)
    assert session.execute(text("SELECT 1")).scalar() == 1
    sessions.close()


def test_session_scope_commits(db):
    with session_scope(bind=db.get_bind()) as session:
        session.add(Game(name="backgammon"))

    assert db.execute(select(func.count()).select_from(Game)).scalar() == 1


def test_session_scope_rolls_back_on_error(db):
    with pytest.raises(RuntimeError):
        with session_scope(bind=db.get_bind()) as session:
            session.add(Game(name="mahjong"))
            session.flush()
            raise RuntimeError("boom")

    assert db.execute(select(func.count()).select_from(Game)).scalar() == 0


def test_session_scope_translates_constraint_failures(db):
    with session_scope(bind=db.get_bind()) as session:
        session.add(Game(name="othello"))

    with pytest.raises(UniqueViolationError):
        with session_scope(bind=db.get_bind()) as session:
            session.add(Game(name="othello"))


def test_session_scope_translates_failures_on_flush(db):
    """Test that a duplicate caught by an explicit flush is still translated."""
    with session_scope(bind=db.get_bind()) as session:
        session.add(User(username="zed", hashed_password="a"))

    with pytest.raises(UniqueViolationError) as exc_info:
        with session_scope(bind=db.get_bind()) as session:
            session.add(User(username="zed", hashed_password="b"))
            session.flush()

    assert (exc_info.value.table, exc_info.value.column) == ("users", "username")
    assert db.execute(select(User.hashed_password)).scalars().all() == ["a"]
