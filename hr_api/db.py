from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool
from loguru import logger

from .config import Settings


# Base class for ORM models
class Base(DeclarativeBase):
    pass


def _enable_sqlite_fks(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-wide handle on the relational store: one engine (and its pool)
    plus the session factory built on it. Created once at startup and passed
    to whoever needs it.
    """

    def __init__(self, settings: Settings):
        url = make_url(settings.sqlalchemy_url)
        self.url = url

        if url.get_backend_name() == "sqlite":
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases live inside one connection
            if url.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_size": settings.db_pool_max,
                "max_overflow": 0,
                "pool_timeout": settings.db_pool_acquire_timeout,
                "pool_recycle": settings.db_pool_idle,
                "pool_pre_ping": True,
            }

        self.engine = create_engine(url, echo=settings.db_echo, **kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_fks)

        # Session factory
        self.sessions = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def create_all(self):
        # Importing models registers the tables on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready")

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def test_connection(self):
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self.engine.dispose()
