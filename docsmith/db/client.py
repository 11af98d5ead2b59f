import os
import logging
from typing import Optional

from psycopg2 import pool

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.ThreadedConnectionPool] = None


def _get_pool() -> pool.ThreadedConnectionPool:
    """Get or create the connection pool."""
    global _connection_pool
    if _connection_pool is None or _connection_pool.closed:
        database_url = os.environ.get("DATABASE_URL")
        if not database_url:
            raise ConnectionError(
                "DATABASE_URL not set. Database functionality will be unavailable."
            )
        try:
            _connection_pool = pool.ThreadedConnectionPool(
                minconn=int(os.environ.get("DB_POOL_MIN", "2")),
                maxconn=int(os.environ.get("DB_POOL_MAX", "10")),
                dsn=database_url,
            )
            logger.info("PostgreSQL connection pool initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize PostgreSQL pool: {e}")
            raise ConnectionError(f"Could not connect to the database: {e}") from e
    return _connection_pool


def get_connection():
    """Get a connection from the pool."""
    return _get_pool().getconn()


def put_connection(conn):
    """Return a connection to the pool."""
    _get_pool().putconn(conn)


def close_pool():
    global _connection_pool
    if _connection_pool is not None and not _connection_pool.closed:
        _connection_pool.closeall()
        logger.info("PostgreSQL connection pool closed")
    _connection_pool = None


def check_tables_exist() -> bool:
    """Check that the migrations have been applied."""
    try:
        conn = get_connection()
    except ConnectionError as e:
        logger.warning(f"Database not available: {e}")
        return False

    try:
        with conn.cursor() as cur:
            cur.execute("SELECT to_regclass('public.document_types') IS NOT NULL")
            (exists,) = cur.fetchone()
        conn.rollback()
        if not exists:
            logger.warning("document_types table does not exist")
            logger.warning("Please run migrations/001_initial.sql to create the necessary tables")
        return bool(exists)
    except Exception as e:
        logger.error(f"Error checking tables: {e}")
        return False
    finally:
        put_connection(conn)
