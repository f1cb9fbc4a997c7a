import logging
from enum import Enum

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ConstraintKind(str, Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_KIND_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: ConstraintKind.UNIQUE,
    PostgresErrorCodes.NOT_NULL_VIOLATION: ConstraintKind.NOT_NULL,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ConstraintKind.FOREIGN_KEY,
    PostgresErrorCodes.CHECK_VIOLATION: ConstraintKind.CHECK,
}

# Checked in order; first hit wins.
_MESSAGE_KEYWORDS: list[tuple[ConstraintKind, tuple[str, ...]]] = [
    (ConstraintKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (ConstraintKind.NOT_NULL, ("not null constraint", "not null", "null value in column")),
    (ConstraintKind.FOREIGN_KEY, ("foreign key constraint", "foreign key", "is not present in table")),
    (ConstraintKind.CHECK, ("check constraint", "check failed")),
]


def _classify_from_postgres_diag(orig) -> tuple[ConstraintKind | None, str | None]:
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    if constraint_name is None:
        # asyncpg exposes the constraint directly on the exception
        constraint_name = getattr(orig, "constraint_name", None)

    try:
        kind = PGCODE_KIND_MAP.get(PostgresErrorCodes(pgcode))
    except ValueError:
        kind = None

    if kind is not None:
        logger.debug(
            "integrity.postgres_diag",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return kind, constraint_name

    logger.warning(
        "integrity.unknown_pgcode",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    logger.debug("integrity.unknown_pgcode_raw", extra={"orig_repr": repr(orig)})
    return ConstraintKind.UNKNOWN, constraint_name


def _classify_from_generic_message(msg: str) -> ConstraintKind:
    """Fallback for SQLite and other drivers without SQLSTATE codes."""
    normalized = (msg or "").lower()

    for kind, keywords in _MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind

    logger.warning("integrity.unknown_message", extra={"message_snippet": (msg or "")[:200]})
    logger.debug("integrity.unknown_message_raw", extra={"raw": msg})
    return ConstraintKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ConstraintKind, str | None]:
    """
    Classify a SQLAlchemy IntegrityError by the kind of constraint it violated.

    Returns:
        (ConstraintKind, constraint name if the driver reports one)
    """
    orig = exc.orig

    kind, constraint_name = _classify_from_postgres_diag(orig)
    if kind is not None:
        return kind, constraint_name

    return _classify_from_generic_message(str(orig)), None
