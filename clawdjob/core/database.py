"""Database configuration and session management for the relational store."""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from clawdjob.core.logging import setup_logging

logger = setup_logging('core_database')

# Initialize base class for declarative models
Base = declarative_base()


def create_tables_if_missing(engine: Engine) -> None:
    """Create missing tables in the database."""
    # Register the tables on Base.metadata
    from clawdjob.core import models  # noqa: F401

    try:
        inspector = inspect(engine)
        existing_tables = inspector.get_table_names()

        with engine.begin() as conn:
            for table in Base.metadata.sorted_tables:
                if table.name not in existing_tables:
                    logger.info(f"Creating missing table: {table.name}")
                    table.create(conn)

    except Exception as e:
        logger.error(f"Error creating tables: {str(e)}")
        raise


def get_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine and make sure the schema exists."""
    try:
        connect_args = {}
        if database_url.startswith('sqlite'):
            connect_args = {"check_same_thread": False}

        engine = create_engine(database_url, connect_args=connect_args)
        create_tables_if_missing(engine)
        return engine

    except Exception as e:
        logger.error(f"Error getting database engine: {str(e)}")
        raise


def get_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Provide a session that commits on success and rolls back on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
