from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cart.infra.db.models import Base
from cart.services.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _is_sqlite_memory(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (":memory:" in database_url or database_url.rstrip("/") == "sqlite:")


def build_engine(database_url: str) -> Engine:
    try:
        if _is_sqlite_memory(database_url):
            # a single shared connection, otherwise every session sees an empty database
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(database_url, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError, ValueError) as exc:
        raise ConfigurationError(f"Cannot create database engine: {exc}") from exc


def init_database(engine: Engine) -> None:
    """Check connectivity and create missing tables."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise ConfigurationError(f"Database at {engine.url.render_as_string()} is unreachable: {exc}") from exc
    logger.info("Database ready at %s", engine.url.render_as_string())


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, class_=Session)

