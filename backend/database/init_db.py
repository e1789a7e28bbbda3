"""
Create the database schema.

Run once against a fresh database (safe to re-run, every statement is
idempotent):

    python -m backend.database.init_db
"""

import logging
import sys

from backend.database.db_connection import Database
from backend.errors import InternalStorageError

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        user_id       SERIAL PRIMARY KEY,
        name          TEXT NOT NULL,
        email         TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        birth_date    DATE NOT NULL,
        created_at    TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    );

    -- No ON DELETE CASCADE: owned events are removed explicitly before the user.
    CREATE TABLE IF NOT EXISTS events (
        event_id   SERIAL PRIMARY KEY,
        user_id    INTEGER NOT NULL REFERENCES users (user_id),
        event_name TEXT NOT NULL,
        venue      TEXT NOT NULL,
        date_time  TIMESTAMPTZ NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_events_owner_time ON events (user_id, date_time);
"""


def init_db(db: Database) -> None:
    """
    Apply SCHEMA_SQL in a single transaction.

    Args:
        db (Database): Storage handle to run the statements on.
    """
    with db.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
    logging.info("Schema is up to date (users, events)")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")
    db = Database.from_env()
    try:
        init_db(db)
    except InternalStorageError as e:
        logging.error(f"Schema creation FAILED: {e.__cause__}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
