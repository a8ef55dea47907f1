# agriai/db.py
import os

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from .config import DATABASE_URL


def _to_psycopg_v3_url(url: str) -> str:
    # Force SQLAlchemy to use psycopg v3 dialect
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


DB_URL = _to_psycopg_v3_url(DATABASE_URL)

# If using local relative SQLite, ensure folder exists
if DB_URL.startswith("sqlite:///./"):
    os.makedirs(os.path.dirname(DB_URL.replace("sqlite:///", "", 1)), exist_ok=True)

# SQLite needs check_same_thread=False for FastAPI sync sessions
engine = create_engine(
    DB_URL,
    connect_args={"check_same_thread": False} if DB_URL.startswith("sqlite") else {},
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def init_db() -> None:
    # models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def ping(db: Session) -> None:
    # Raises if DB is unreachable
    db.execute(text("SELECT 1"))


# Dependency to get a DB session per request
def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
