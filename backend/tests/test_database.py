"""
Tests for engine creation and the session_scope unit of work.
"""

import pytest
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from database import create_db_engine, session_scope
from exceptions import DatabaseError
from models import School, User


@pytest.fixture
def Session(engine):
    return sessionmaker(bind=engine)


def test_commit_on_success(Session):
    with session_scope(Session) as db:
        db.add(School(name='Committed College'))

    with session_scope(Session) as db:
        assert db.query(School).filter_by(name='Committed College').count() == 1


def test_rollback_on_error(Session):
    with pytest.raises(RuntimeError):
        with session_scope(Session) as db:
            db.add(School(name='Rolled Back College'))
            db.flush()
            raise RuntimeError("boom")

    with session_scope(Session) as db:
        assert db.query(School).count() == 0


def test_integrity_error_becomes_database_error(Session):
    with pytest.raises(DatabaseError) as exc_info:
        with session_scope(Session) as db:
            db.add(User(username='dup'))
            db.add(User(username='dup'))

    assert exc_info.value.operation == 'commit'
    with session_scope(Session) as db:
        assert db.query(User).count() == 0


def test_sqlite_pragmas(tmp_path):
    file_engine = create_db_engine(f"sqlite:///{tmp_path / 'nested' / 'app.db'}")
    try:
        with file_engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == 'wal'
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
            assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 5000
        assert (tmp_path / 'nested').is_dir()
    finally:
        file_engine.dispose()
