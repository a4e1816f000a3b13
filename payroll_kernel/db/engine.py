"""
Module: payroll_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and transactional scope utilities.  This is the single point of database
    connection configuration for the payroll system.
Architecture position: Kernel > DB.  May import from db/base.py.
    MUST NOT import from selectors/, domain/, or outer layers
    (except create_tables, which imports models to register their tables).

Invariants enforced:
    - The database URL decides the backend.  Server databases get a QueuePool
      with pre-ping; SQLite gets a single shared connection so in-memory
      databases survive across sessions.
    - Sessions never expire loaded attributes on commit.

Failure modes:
    - RuntimeError if get_engine/get_session/get_session_factory called before
      init_engine_from_url().
    - Connection pool exhaustion if pool_size + max_overflow is exceeded.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from payroll_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Initialize the SQLAlchemy engine from a database URL.

    Idempotent in effect: a second call replaces the first engine.

    Args:
        database_url: Any SQLAlchemy URL (``sqlite://``, ``postgresql://...``).
        echo: If True, log all SQL statements.
        pool_size: Connections kept in the pool (ignored for SQLite).
        max_overflow: Max connections beyond pool_size (ignored for SQLite).
        pool_pre_ping: Test connections before use.
        pool_timeout: Seconds to wait for a pooled connection.
        pool_recycle: Seconds after which a connection is recycled.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()

    dialect = make_url(database_url).get_backend_name()
    if dialect == "sqlite":
        _engine = create_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        _engine = create_engine(
            database_url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
        )

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={"dialect": dialect, "echo": echo},
    )

    return _engine


def _not_initialized() -> RuntimeError:
    return RuntimeError("No payroll database engine; call init_engine_from_url() first.")


def get_engine() -> Engine:
    """The current engine.  Raises RuntimeError before initialization."""
    if _engine is None:
        raise _not_initialized()
    return _engine


def get_session() -> Session:
    """A new session from the current factory."""
    return get_session_factory()()


def get_session_factory() -> sessionmaker[Session]:
    """Session factory, for callers that open one session per thread."""
    if _SessionFactory is None:
        raise _not_initialized()
    return _SessionFactory


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Commits on normal exit; rolls back and re-raises on exception; always
    closes the session.

    Usage:
        with session_scope() as session:
            session.add(entity)
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """
    Create every payroll table.

    Raises:
        RuntimeError: If engine is not initialized.
    """
    from payroll_kernel.db.base import Base
    import payroll_kernel.models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """Drop all tables. Primarily for testing."""
    from payroll_kernel.db.base import Base
    import payroll_kernel.models  # noqa: F401

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None
