"""
Event ledger: persistence for `events` rows.
Each event belongs to exactly one user (`events.user_id`).
"""

from datetime import datetime
from typing import List, Optional

from psycopg2.extensions import connection as PgConnection

from backend.database.db_connection import Database
from backend.events_service.models import Event

EVENT_COLUMNS = "event_id, user_id, event_name, venue, date_time"


class EventLedger:
    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, owner_id: int, event_name: str, venue: str, date_time: datetime) -> Event:
        sql = f"""
            INSERT INTO events (user_id, event_name, venue, date_time)
            VALUES (%s, %s, %s, %s)
            RETURNING {EVENT_COLUMNS};
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (owner_id, event_name, venue, date_time))
                row = cur.fetchone()
        return Event.from_row(row)

    def list_by_owner(self, owner_id: int) -> List[Event]:
        """
        Return the owner's events, earliest first.

        Ties on date_time are broken by id so the order is stable.
        """
        sql = f"""
            SELECT {EVENT_COLUMNS}
            FROM events
            WHERE user_id = %s
            ORDER BY date_time ASC, event_id ASC;
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (owner_id,))
                rows = cur.fetchall()
        return [Event.from_row(row) for row in rows]

    def delete_by_id(self, event_id: int) -> bool:
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM events WHERE event_id = %s;", (event_id,))
                return cur.rowcount > 0

    def delete_all_by_owner(self, owner_id: int, conn: Optional[PgConnection] = None) -> int:
        """
        Delete every event owned by `owner_id`.

        Args:
            owner_id (int): The owning user.
            conn (connection, optional): Join an enclosing transaction.

        Returns:
            int: Number of events removed.
        """
        with self.db.connection(conn) as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM events WHERE user_id = %s;", (owner_id,))
                return cur.rowcount
