import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BadRequestError, DomainError, RepositoryError
from .integrity_classifier import ConstraintKind, classify_integrity_error

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_PG_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
_PG_KEY = re.compile(r"key \((?P<cols>[^)]+)\)=", re.IGNORECASE)
_SQLITE_FAILED = re.compile(r"(?:UNIQUE|NOT NULL|CHECK) constraint failed: (?P<cols>.+)$", re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the driver message.

    Handles:
      - Postgres: 'null value in column "name" ...', 'DETAIL: Key (country_id)=(9) ...'
      - SQLite:   'UNIQUE constraint failed: countries.name, countries.short_name'
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    if not msg:
        return None

    m = _PG_NOT_NULL.search(msg)
    if m:
        return [m.group("col")]

    m = _PG_KEY.search(msg)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    m = _SQLITE_FAILED.search(msg.strip())
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]

    return None


# -----------------------
# Mapper
# -----------------------

def _with_fields(message: str, columns: list[str] | None) -> str:
    if columns:
        return f"{message}: {', '.join(columns)}"
    return message


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Translate a storage constraint violation into an app-level error and raise it.

    Known constraint kinds are the caller's fault and become `BadRequestError`
    with a sanitized message. Anything unclassified becomes `RepositoryError`.
    """
    kind, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    if kind is ConstraintKind.UNKNOWN:
        logger.warning(
            "mapper.unknown_integrity_error",
            extra={"model": model_part, "constraint": constraint_name},
        )
        raise RepositoryError(f"{model_part} database integrity error.", model=model_name) from exc

    logger.info(
        f"mapper.{kind.value}_violation",
        extra={"model": model_part, "fields": columns, "constraint": constraint_name},
    )

    if kind is ConstraintKind.UNIQUE:
        message = _with_fields(f"{model_part} already exists", columns)
    elif kind is ConstraintKind.NOT_NULL:
        message = _with_fields(f"Missing required field for {model_part}", columns)
    elif kind is ConstraintKind.FOREIGN_KEY:
        message = _with_fields(f"{model_part} references a record that does not exist", columns)
    else:
        message = f"{model_part} violates a business rule"

    raise BadRequestError(message, fields=columns) from exc


# -----------------------
# Async context manager shared by repositories
# -----------------------

async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... statements, then a single commit ...

    Any failure rolls the session back so no partial change persists.
    Domain errors propagate unchanged; integrity errors are classified;
    everything else becomes a sanitized `RepositoryError`.
    """
    try:
        yield
    except DomainError:
        await _safe_rollback(db, model_name)
        raise
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}", model=model_name) from exc
