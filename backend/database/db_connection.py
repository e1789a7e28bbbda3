"""
PostgreSQL connection pool.
Provides the Database handle shared by the user directory and event ledger.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extensions import connection as PgConnection
from psycopg2.extras import DictCursor
from psycopg2.pool import ThreadedConnectionPool

from backend import config
from backend.errors import InternalStorageError


class Database:
    """
    Process-wide storage handle wrapping a thread-safe connection pool.

    Create one at startup and call `close()` at shutdown.

    Usage:
        with db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(...)
    """

    def __init__(self, dsn: str, minconn: int = 1, maxconn: int = 10) -> None:
        try:
            # Rows come back with dictionary-based access,
            # e.g. row["user_id"], row["email"]
            self._pool = ThreadedConnectionPool(minconn, maxconn, dsn, cursor_factory=DictCursor)
        except psycopg2.Error as e:
            logging.error(f"Error connecting to database: {e}")
            raise InternalStorageError() from e
        logging.info(f"Database pool ready ({minconn}-{maxconn} connections)")

    @classmethod
    def from_env(cls) -> "Database":
        """
        Build the pool from DATABASE_URL and the DB_POOL_* settings.

        Raises:
            RuntimeError: If DATABASE_URL is not set.
        """
        if not config.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not set. Please set the environment variable.")
        return cls(config.DATABASE_URL, config.DB_POOL_MIN, config.DB_POOL_MAX)

    @contextmanager
    def connection(self, conn: Optional[PgConnection] = None) -> Iterator[PgConnection]:
        """
        Borrow a connection for one transaction.

        The transaction commits when the block exits normally and rolls back
        otherwise. Passing an already borrowed `conn` joins its transaction
        instead of opening a new one; the outer block then owns commit.

        Args:
            conn (connection, optional): Connection of an enclosing transaction.

        Raises:
            InternalStorageError: On any driver error (the original is chained).
        """
        if conn is not None:
            yield conn
            return

        try:
            conn = self._pool.getconn()
        except psycopg2.Error as e:
            raise InternalStorageError() from e

        try:
            yield conn
            conn.commit()
        except psycopg2.Error as e:
            self._rollback(conn)
            raise InternalStorageError() from e
        except BaseException:
            self._rollback(conn)
            raise
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    @staticmethod
    def _rollback(conn: PgConnection) -> None:
        # A broken connection cannot roll back; the pool discards it instead.
        if not conn.closed:
            conn.rollback()

    def close(self) -> None:
        """Close every pooled connection."""
        if not self._pool.closed:
            self._pool.closeall()
            logging.info("Database pool closed")
