from contextlib import contextmanager
from pathlib import Path
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from config.app_config import get_config
from exceptions import DatabaseError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == 'sqlite' and url.database in (None, '', ':memory:')


def create_db_engine(database_url: str, **kwargs):
    """
    Create an engine for the given URL.

    SQLite files get WAL mode and a busy timeout so concurrent requests wait
    for the write lock instead of failing immediately.
    """
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == 'sqlite'
    options = {'echo': False, 'pool_pre_ping': True}

    if is_sqlite:
        options['connect_args'] = {'check_same_thread': False}
        if not _is_memory_sqlite(url):
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
            options.update(pool_size=20, max_overflow=30, pool_recycle=3600)
    else:
        options.update(pool_size=20, max_overflow=30, pool_recycle=3600)
    options.update(kwargs)

    db_engine = create_engine(database_url, **options)

    if is_sqlite:
        @event.listens_for(db_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            if not _is_memory_sqlite(url):
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return db_engine


engine = create_db_engine(get_config().database_url)
SessionLocal = sessionmaker(bind=engine)


@contextmanager
def session_scope(session_factory=None):
    """
    Run one unit of work: commit on success, roll back on any error.

    SQLAlchemy failures are logged and re-raised as DatabaseError so callers
    only ever see an opaque storage failure.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"DB integrity error: {e}")
        raise DatabaseError("commit", "Integrity constraint violated") from e
    except OperationalError as e:
        session.rollback()
        logger.error(f"DB operational error: {e}")
        raise DatabaseError("execute", "Connection or operational error") from e
    except DBAPIError as e:
        session.rollback()
        logger.error(f"DB driver error: {e}")
        raise DatabaseError("query", "Database driver error") from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"SQLAlchemy error: {e}")
        raise DatabaseError("unknown", "Database operation failed") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
