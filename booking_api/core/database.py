from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator

from .config import Settings

Base = declarative_base()

def _engine_options(url: str) -> dict:
    """Connection options for the configured backend."""
    if url.startswith("sqlite"):
        # TestClient and uvicorn workers hand sessions across threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
    }

class Database:
    """Engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        self.url = settings.get_database_url
        self.engine = create_engine(self.url, **_engine_options(self.url))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def backend(self) -> str:
        if "postgresql" in self.url:
            return "PostgreSQL"
        if "sqlite" in self.url:
            return "SQLite"
        return "Unknown"

    def session(self) -> Session:
        return self.SessionLocal()

    def init_db(self):
        """Initialize database tables."""
        from .. import models  # noqa: F401  registers the tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)

    def drop_db(self):
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()

# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
