"""
Database base configuration for SQLAlchemy models.

Uses SQLAlchemy 2.0 style with DeclarativeBase and Mapped types for proper
type checking support. Endpoints are synchronous and receive one Session
per request through get_db.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from dotenv import load_dotenv

from app.core.config import settings

# Load environment variables
load_dotenv()

DATABASE_URL = settings.DATABASE_URL

# SQLite connections must be shareable across FastAPI's threadpool workers
_connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args=_connect_args,
    pool_pre_ping=True,  # Verify connections are alive before using them
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """
    SQLAlchemy 2.0 declarative base class with type annotation support.
    """

    pass


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get a database session.

    Yields a session and rolls back on error; the session is always closed.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
