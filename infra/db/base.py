# infra/db/base.py
from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def sqlite_url(db_path) -> str:
    return f"sqlite:///{db_path.as_posix()}"


def create_session_factory(db_url: str, *, create_schema: bool = True) -> sessionmaker:
    """
    Engine + sessionmaker for ``db_url``.

    The schema is created on first use; there are no migrations.
    """
    logger.info("Using database at: %s", db_url)
    engine = create_engine(db_url, echo=False, future=True)
    if create_schema:
        # Registers the ORM classes on Base.metadata.
        import infra.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
