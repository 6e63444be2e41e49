"""Database engine and the shared connection resource."""
import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import Executable

from lightbnb.config import Settings, settings
from lightbnb.db.models import Base
from lightbnb.errors import translate_error

logger = logging.getLogger(__name__)

Statement = Union[str, Executable]


POSTGRES_DRIVER = "postgresql+psycopg2"


def _with_postgres_driver(url: str) -> str:
    """Pin bare postgres URLs to the psycopg2 driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return f"{POSTGRES_DRIVER}://" + url[len(prefix):]
    return url


def get_engine(db_url: Optional[str] = None, config: Optional[Settings] = None) -> Engine:
    """Create a SQLAlchemy engine for the configured database.

    Args:
        db_url: Optional database URL; overrides the configured one
        config: Optional settings object (defaults to the module settings)

    Returns:
        SQLAlchemy engine backed by a connection pool

    Note:
        Bound parameter values are kept out of error messages, since they
        can carry password hashes. SQLite engines allow use from worker
        threads, and in-memory SQLite shares a single connection so every
        thread sees the same database.
    """
    config = config or settings
    url = _with_postgres_driver(db_url or config.database_url)

    if url.startswith("postgresql"):
        return create_engine(
            url, echo=False, hide_parameters=True, pool_pre_ping=True, pool_size=config.pool_size
        )

    if url.startswith("sqlite"):
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            return create_engine(
                url,
                echo=False,
                hide_parameters=True,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(
            url, echo=False, hide_parameters=True, connect_args={"check_same_thread": False}
        )

    return create_engine(url, echo=False, hide_parameters=True, pool_pre_ping=True)


class Database:
    """Shared handle to the database used by every query function.

    The engine (and its pool) is created on first use. Statements run on a
    worker thread so callers can await them and keep several in flight; each
    statement runs in its own transaction and is committed on success.

    Example:
        >>> db = Database(Settings(db_url="sqlite:///lightbnb.db"))
        >>> rows = await db.execute("SELECT * FROM users WHERE id = :id", {"id": 1})
        >>> db.dispose()
    """

    def __init__(self, config: Optional[Settings] = None, engine: Optional[Engine] = None):
        self.config = config or settings
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = get_engine(config=self.config)
            logger.info(f"Database engine created for {self._engine.url!r}")
        return self._engine

    def _run(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        if isinstance(statement, str):
            statement = text(statement)

        connected = False
        try:
            with self.engine.begin() as conn:
                connected = True
                result = conn.execute(statement, dict(params)) if params else conn.execute(statement)
                if not result.returns_rows:
                    return []
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as e:
            # Driver message only: str(e) would append the bound values
            logger.error(f"Query failed: {getattr(e, 'orig', None) or e}")
            raise translate_error(e, connected=connected) from e

    async def execute(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute one statement and return every row as a dict.

        Args:
            statement: SQLAlchemy statement, or raw SQL text with named binds
            params: Bind values for raw SQL text

        Returns:
            List of rows (empty for statements that return no rows)

        Raises:
            ConnectionFailure: If the database cannot be reached
            ConstraintViolation: If a write breaks a constraint
            QuerySyntaxError: If the statement is rejected as malformed
        """
        return await asyncio.to_thread(self._run, statement, params)

    async def fetch_one(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Execute one statement and return its first row, or None."""
        rows = await self.execute(statement, params)
        return rows[0] if rows else None

    def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connections closed")


_database: Optional[Database] = None


def get_database() -> Database:
    """Return the lazily-initialised process-wide Database (singleton)."""
    global _database
    if _database is None:
        _database = Database()
    return _database


def reset_database() -> None:
    """Dispose the default Database so the next access reconnects."""
    global _database
    if _database is not None:
        _database.dispose()
    _database = None


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables (development bootstrap; production schema is external)."""
    Base.metadata.create_all(bind=engine or get_database().engine)
