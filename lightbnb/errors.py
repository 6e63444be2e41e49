"""Typed failures raised by the data-access layer.

A missing row is never an error: single-row lookups return ``None`` and list
queries return an empty list.
"""
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
    SQLAlchemyError,
)


class RepositoryError(Exception):
    """Base exception for data-access errors."""
    pass


class ConnectionFailure(RepositoryError):
    """Raised when the database cannot be reached or drops the connection."""
    pass


class ConstraintViolation(RepositoryError):
    """Raised when a write breaks a database constraint (e.g. duplicate email)."""
    pass


class QuerySyntaxError(RepositoryError):
    """Raised when the database rejects a statement as malformed."""
    pass


def translate_error(exc: SQLAlchemyError, connected: bool = False) -> RepositoryError:
    """Map a SQLAlchemy exception onto the repository error taxonomy.

    Args:
        exc: The exception raised while running a statement
        connected: Whether a connection had been checked out when it was raised.
            SQLite reports unknown tables and syntax errors as OperationalError,
            so on a live, still-valid connection that class means a rejected
            statement rather than an unreachable database.
    """
    if isinstance(exc, IntegrityError):
        return ConstraintViolation(str(exc.orig))
    if isinstance(exc, ProgrammingError):
        return QuerySyntaxError(str(exc.orig))
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return ConnectionFailure(str(exc.orig))
    if isinstance(exc, OperationalError) and connected:
        return QuerySyntaxError(str(exc.orig))
    if isinstance(exc, (OperationalError, InterfaceError)):
        return ConnectionFailure(str(exc.orig))
    return RepositoryError(str(exc))
