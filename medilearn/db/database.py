import logging
import time

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from medilearn.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


engine: Engine | None = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)


def init_engine(database_url: str) -> Engine:
    """
    (Re)create the global engine and rebind SessionLocal to it.
    """
    global engine

    connect_args = {}
    if database_url.startswith("sqlite"):
        # TestClient / uvicorn workers use several threads
        connect_args["check_same_thread"] = False

    if engine is not None:
        engine.dispose()

    engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)
    SessionLocal.configure(bind=engine)
    return engine


def connect_with_retry(db_engine: Engine, retries: int = 3, delay: float = 2.0) -> None:
    """
    Only retry in the app: a fixed number of attempts with a flat delay.
    The last error propagates.
    """
    for attempt in range(1, retries + 1):
        try:
            logger.info("Database connection attempt %s...", attempt)
            with db_engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connected")
            return
        except OperationalError as e:
            logger.error("Database connection error (attempt %s): %s", attempt, e)
            if attempt >= retries:
                logger.error("Max connection attempts reached")
                raise
            logger.info("Retrying connection in %s seconds...", delay)
            time.sleep(delay)


def init_db(settings: Settings) -> Engine:
    db_engine = init_engine(settings.DATABASE_URL)
    connect_with_retry(
        db_engine,
        retries=max(1, settings.DB_CONNECT_RETRIES),
        delay=settings.DB_CONNECT_RETRY_DELAY,
    )

    from medilearn.db import models  # noqa: F401  (registers the tables)

    Base.metadata.create_all(bind=db_engine)
    return db_engine


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
