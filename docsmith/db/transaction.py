import logging
from contextlib import contextmanager

import psycopg2
from psycopg2 import errors

from docsmith.errors import (
    ConflictError,
    InternalError,
    ReferentialError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

# Unique constraint name -> attribute reported back to the client.
UNIQUE_CONSTRAINTS = {
    "document_types_name_key": "name",
    "document_types_slug_key": "slug",
    "document_fields_document_type_id_field_name_key": "field_name",
    "users_email_key": "email",
    "users_phone_key": "phone",
    "document_field_data_user_document_id_field_id_key": "field_id",
}


def _conflicting_field(error: Exception):
    message = str(error)
    for constraint, field in UNIQUE_CONSTRAINTS.items():
        if constraint in message:
            return field
    return None


@contextmanager
def transaction(conn, operation: str):
    """Run a block of writes as one atomic unit.

    Commits when the block exits cleanly and rolls back on any exception.
    Driver errors are translated so callers never see raw psycopg2 errors.
    """
    try:
        yield conn
        conn.commit()
    except errors.UniqueViolation as e:
        conn.rollback()
        field = _conflicting_field(e)
        logger.warning(f"[{operation}] unique violation on {field or 'unknown field'}: {e}")
        if field:
            raise ConflictError(
                f"A record with this {field} already exists",
                {"field": field},
            ) from e
        raise ConflictError("A record with these values already exists") from e
    except errors.ForeignKeyViolation as e:
        conn.rollback()
        logger.warning(f"[{operation}] foreign key violation: {e}")
        raise ReferentialError("Operation rejected due to existing references") from e
    except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
        _safe_rollback(conn, operation)
        logger.error(f"[{operation}] database unavailable: {e}")
        raise ServiceUnavailableError("Database service unavailable. Please try again later.") from e
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"[{operation}] database error: {e}")
        raise InternalError(debug=f"Database error during {operation.lower()}") from e
    except Exception:
        conn.rollback()
        logger.info(f"[{operation}] rolled back")
        raise


def _safe_rollback(conn, operation: str):
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.error(f"[{operation}] rollback failed: {e}")
