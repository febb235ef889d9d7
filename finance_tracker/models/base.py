"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from finance_tracker.config import get_settings

settings = get_settings()

# pool_pre_ping=True tests connections before handing them out,
# so a restarted database does not fail the next ledger write.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# autocommit=False: the request handler decides when the
# transaction row and the balance update are committed, together.
# autoflush=False: SQL is only sent on an explicit flush/commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes,
    even if an error occurs, so connections are returned to
    the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
