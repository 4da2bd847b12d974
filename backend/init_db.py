from sqlalchemy import inspect
from sqlalchemy.orm import Session, sessionmaker
import logging

from database import engine, Base, session_scope
from models import ProcessType, RatingType

logger = logging.getLogger(__name__)

# (name, status_order, percentage)
DEFAULT_PROCESS_TYPES = [
    ("Considering", 10, False),
    ("Visited", 20, False),
    ("Application In Progress", 30, True),
    ("Applied", 40, False),
    ("Accepted", 50, False),
    ("Rejected", 60, False),
    ("Enrolled", 70, False),
]

DEFAULT_RATING_TYPES = [
    "Academics",
    "Campus",
    "Social Life",
    "Location",
    "Cost",
]


def seed_defaults(db: Session) -> int:
    """
    Insert the default process and rating types when their tables are empty.

    Returns:
        Number of rows inserted
    """
    inserted = 0
    if db.query(ProcessType).count() == 0:
        for name, order, percentage in DEFAULT_PROCESS_TYPES:
            db.add(ProcessType(name=name, status_order=order, percentage=percentage, use_by_default=True))
            inserted += 1
    if db.query(RatingType).count() == 0:
        for name in DEFAULT_RATING_TYPES:
            db.add(RatingType(name=name, use_by_default=True))
            inserted += 1
    db.flush()
    return inserted


def init_database(db_engine=None):
    """Create missing tables and seed lookup data."""
    db_engine = db_engine or engine
    existing = set(inspect(db_engine).get_table_names())
    Base.metadata.create_all(bind=db_engine)
    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info(f"Created tables: {', '.join(created)}")

    with session_scope(sessionmaker(bind=db_engine)) as db:
        inserted = seed_defaults(db)
    if inserted:
        logger.info(f"Seeded {inserted} default lookup rows")
    logger.info("Database initialized")


if __name__ == "__main__":
    from config.app_config import get_config
    from utils.logging_utils import configure_logging

    config = get_config()
    configure_logging(config.log_level, config.log_file)
    init_database()
