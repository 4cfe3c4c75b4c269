"""SQLAlchemy Base and engine factory for the document table."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def create_session_factory(database_url: str, lock_timeout_seconds: float = 15.0):
    """Create the engine and session factory used by the document store.

    ``lock_timeout_seconds`` bounds how long a writer waits for another
    writer's document lock before the store call fails.
    """
    if database_url.startswith("sqlite"):
        # Sessions are opened from the request thread pool
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": lock_timeout_seconds},
        )
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_timeout=lock_timeout_seconds,
        )
    return engine, sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
