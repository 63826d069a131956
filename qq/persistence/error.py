"""Translation of database driver errors into domain errors."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from qq.domain.error import (
    DomainError,
    InternalServerError,
    UniqueViolationError,
    ValidationError,
)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"

_VALIDATION_CODES = frozenset(
    {FOREIGN_KEY_VIOLATION, CHECK_VIOLATION, NOT_NULL_VIOLATION}
)


def sqlstate(exc: SQLAlchemyError) -> str | None:
    """Extract the SQLSTATE code from a wrapped DBAPI error, if any."""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_db_error(exc: SQLAlchemyError) -> DomainError:
    """Map a SQLAlchemy error to the matching domain error.

    Args:
        exc: Error raised by the driver

    Returns:
        Domain error to raise in its place
    """
    code = sqlstate(exc)
    if isinstance(exc, IntegrityError) or code is not None:
        if code == UNIQUE_VIOLATION:
            return UniqueViolationError(f"Unique constraint violated: {exc.orig}")
        if code in _VALIDATION_CODES:
            return ValidationError(f"Constraint violated: {exc.orig}")
    return InternalServerError(f"Database error: {exc}")
