import os
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from config import DATABASE_URL, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str = DATABASE_URL, **overrides) -> Engine:
    """Build an engine for the given URL. The caller owns its lifecycle."""
    engine_args = {}
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
    else:
        # Production settings for PostgreSQL
        engine_args.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
        })
    engine_args.update(overrides)

    try:
        engine = create_engine(url, echo=False, **engine_args)
    except Exception as e:
        logger.error(f"Failed to create engine: {e}")
        raise

    if url.startswith("sqlite"):
        # SQLite leaves foreign keys off unless asked on every connection
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine):
    """Create the data/ directory for file-based SQLite, then create all tables."""
    url = str(engine.url)
    if url.startswith("sqlite") and engine.url.database and engine.url.database != ":memory:":
        directory = os.path.dirname(engine.url.database)
        if directory:
            os.makedirs(directory, exist_ok=True)

    # Import all models so they register with Base.metadata
    import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized successfully.")
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise


def get_db(request: Request):
    """FastAPI dependency — yields a session from the app's factory and closes it after use."""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
