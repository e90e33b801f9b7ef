"""Database session management."""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .models import Base

class SessionManager:
    """Manages database sessions.

    Used as a context manager, one ``with`` block is one unit of work:
    it commits on success and rolls back if the block raises.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize session manager with database URL."""
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)

    def create_tables(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)
        self.logger.debug(f"Ensured schema for {self.engine.url.render_as_string(hide_password=True)}")

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    def __enter__(self) -> Session:
        """Context manager entry."""
        self.session = self.get_session()
        return self.session

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                self.session.commit()
            else:
                self.logger.debug("Rolling back session")
                self.session.rollback()
        finally:
            self.session.close()

    def dispose(self) -> None:
        self.engine.dispose()
