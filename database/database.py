import os
import logging
import contextlib
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from database.models import Base

logger = logging.getLogger(__name__)

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///jobboard.db")

engine: Optional[Engine] = None
SessionLocal = sessionmaker(autoflush=False)


def init_engine(url: Optional[str] = None, echo: bool = False, create_tables: bool = True) -> Engine:
    """Create the engine, bind the session factory and optionally create tables."""
    global engine
    engine = create_engine(url or DATABASE_URL, echo=echo)
    SessionLocal.configure(bind=engine)
    if create_tables:
        Base.metadata.create_all(engine)
    logger.info(f"Database engine initialised ({engine.url.get_backend_name()})")
    return engine


def get_db():
    if engine is None:
        init_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextlib.contextmanager
def db_session_scope():
    """Provide a transactional scope around a series of operations."""
    if engine is None:
        init_engine()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
