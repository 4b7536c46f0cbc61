# tweeteroo/database.py
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from tweeteroo.core.config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync routes in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create the users/tweets tables and make sure the store answers."""
    # models register themselves on Base.metadata when imported
    from tweeteroo.models import tweet, user  # noqa: F401

    bind = bind or engine
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
    Base.metadata.create_all(bind=bind)
    logger.info("Connected successfully to the database; tables ready: users, tweets")
