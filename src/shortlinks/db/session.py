import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.shortlinks.core.config import settings
from src.shortlinks.db.base import Base

# Imported so the models register with Base before create_all
from src.shortlinks.models import url as url_models, user as user_models  # noqa: F401


class Database:
    """
    Owns the engine, the session factory and the lock that serializes writes.

    The default URL is a private in-memory SQLite database. StaticPool keeps
    the single connection alive for the lifetime of the process, so every
    session sees the same data.
    """

    def __init__(self, url: str | None = None):
        url = url or settings.DATABASE_URL
        if url.startswith("sqlite"):
            self.engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(url)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        self._lock = threading.RLock()

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run a block as one atomic critical section.

        Holds the process-wide lock for the whole block, commits on success
        and rolls back on any exception so callers never observe partial writes.
        """
        with self._lock:
            db = self.SessionLocal()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def dispose(self):
        self.engine.dispose()
