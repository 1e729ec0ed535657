from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import QueuePool, StaticPool
from store_locator.core.config import settings
import contextlib

from store_locator import models  # noqa: F401  registers tables on SQLModel.metadata


def build_engine(db_url: str):
    if db_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # In-memory databases live on a single connection
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(db_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(db_url, connect_args=connect_args)

    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,  # Number of connections to keep open
        max_overflow=10,  # Maximum number of connections to create beyond pool_size
        pool_timeout=30,  # Timeout in seconds for getting a connection from the pool
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True  # Verify connections before using them from the pool
    )


engine = build_engine(settings.DATABASE_URL)

def create_db_and_tables(bind=None):
    SQLModel.metadata.create_all(bind or engine)

def get_session():
    with Session(engine) as session:
        yield session

@contextlib.contextmanager
def get_write_session_context(bind=None):
    session = Session(bind or engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

@contextlib.contextmanager
def get_read_session_context(bind=None):
    session = Session(bind or engine)
    try:
        yield session
    finally:
        session.close()
