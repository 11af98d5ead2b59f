import logging
from typing import Generator

from docsmith.db.client import get_connection, put_connection
from docsmith.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)


def get_db() -> Generator:
    """Yield a psycopg2 connection, then return it to the pool."""
    try:
        conn = get_connection()
    except ConnectionError as e:
        logger.error(f"[GET_DB] {e}")
        raise ServiceUnavailableError("Database service unavailable. Please try again later.")
    try:
        yield conn
    finally:
        # Reads leave an implicit transaction open; close it before pooling.
        if not conn.closed:
            conn.rollback()
        put_connection(conn)
