"""Custom exception classes for the registrar."""

from typing import Mapping, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class RegistrarError(Exception):
    """Base exception for the registrar."""

    def __init__(self, message: str = "An error occurred", detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class NotFoundError(RegistrarError):
    """Raised when a referenced entity does not exist."""

    def __init__(
        self,
        entity: str,
        entity_id,
        detail: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} {entity_id} does not exist", detail)


class UniquenessViolation(RegistrarError):
    """Raised when a unique column or column pair would be duplicated."""
    pass


class ConstraintViolation(RegistrarError):
    """Raised when a range, enumeration or required-value check fails."""
    pass


class StorageFailure(RegistrarError):
    """Raised for any other failure reported by the database engine."""
    pass


# MySQL server error codes (as surfaced by PyMySQL)
MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_NO_REFERENCED_ROW = 1452
MYSQL_CHECK_CONSTRAINT = 3819
MYSQL_BAD_NULL = 1048


def _driver_code(exc: IntegrityError) -> Optional[int]:
    args = getattr(exc.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _missing_reference(detail: str, refs: Mapping[str, object]):
    """Pick the referenced entity a foreign-key error points at.

    MySQL names the parent table (`students`, `courses`); SQLite does not, so
    a single candidate is taken as is.
    """
    lowered = detail.lower()
    for entity, entity_id in refs.items():
        if f"`{entity.lower()}s`" in lowered:
            return entity, entity_id
    if len(refs) == 1:
        return next(iter(refs.items()))
    return " or ".join(refs), tuple(refs.values())


def translate_db_error(
    exc: SQLAlchemyError,
    operation: str,
    refs: Optional[Mapping[str, object]] = None,
) -> RegistrarError:
    """Map an engine error raised during ``operation`` onto the error taxonomy.

    ``refs`` maps entity names to the ids the write referenced, so a
    foreign-key failure can name what went missing. The engine's own message
    is kept on ``.detail`` for diagnostics.
    """
    detail = str(getattr(exc, "orig", None) or exc)
    message = f"{operation} failed: {detail}"

    if not isinstance(exc, IntegrityError):
        return StorageFailure(message, detail)

    code = _driver_code(exc)
    lowered = detail.lower()

    if code == MYSQL_DUPLICATE_ENTRY or "unique constraint" in lowered or "duplicate" in lowered:
        return UniquenessViolation(message, detail)
    if code in (MYSQL_CHECK_CONSTRAINT, MYSQL_BAD_NULL) or "check constraint" in lowered or "not null" in lowered:
        return ConstraintViolation(message, detail)
    if code == MYSQL_NO_REFERENCED_ROW or "foreign key" in lowered:
        entity, entity_id = _missing_reference(detail, refs or {"Referenced row": None})
        return NotFoundError(entity, entity_id, detail, message=message)
    return StorageFailure(message, detail)
