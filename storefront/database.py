import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """
    Store handle owning the engine, its connection pool and the session factory.

    Built once by the application factory and shared through ``app.state``.
    Extra keyword arguments go straight to ``create_engine`` (tests pass a
    ``StaticPool`` here).
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False,
        **engine_kwargs,
    ):
        if url.startswith("sqlite"):
            connect_args = engine_kwargs.pop("connect_args", {})
            connect_args.setdefault("check_same_thread", False)
            engine_kwargs["connect_args"] = connect_args
        else:
            # Bounded pool; checkout blocks until a connection is returned
            engine_kwargs.setdefault("pool_size", pool_size)
            engine_kwargs.setdefault("max_overflow", max_overflow)
            engine_kwargs.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine = create_engine(url, echo=echo, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session and always close it, returning the connection to the pool."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a block as one transaction: commit on clean exit, rollback on any error.

    Usage:
        with atomic(db):
            db.add(order)
            ...
    """
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.info(f"Transaction rolled back: {e!r}")
        raise


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency to get database session.
    Yields a database session and closes it after use.
    """
    database: Database = request.app.state.database
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
