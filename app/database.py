"""Database engine, session factory and transaction helpers"""
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import get_settings
from app.services.errors import FamilyTreeError, StorageError, translate_integrity_error

logger = logging.getLogger(__name__)

settings = get_settings()

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, _):
    """Turn on FK enforcement for SQLite connections so ON DELETE CASCADE applies"""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON;")
        finally:
            cursor.close()


def get_db():
    """FastAPI dependency yielding a request-scoped session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables"""
    from app import models  # noqa: F401  registers tables with Base

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def transaction(db: Session):
    """
    Run a block as one unit of work.
    Commits on success; rolls back on any error. Storage errors are
    translated into the FamilyTreeError taxonomy so callers never see
    raw driver exceptions.
    """
    try:
        yield db
        db.commit()
    except FamilyTreeError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        raise translate_integrity_error(e) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction failed: {e}")
        raise StorageError() from e
    except Exception:
        db.rollback()
        raise
