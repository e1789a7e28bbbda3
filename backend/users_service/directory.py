"""
User directory: persistence for `users` rows.

Email uniqueness is enforced by the UNIQUE constraint on `users.email`;
a unique violation from PostgreSQL is reported as DuplicateEmail.
"""

from datetime import date
from typing import Optional

import psycopg2.errors
from psycopg2.extensions import connection as PgConnection

from backend.database.db_connection import Database
from backend.errors import DuplicateEmail, NotFound
from backend.users_service.models import User

USER_COLUMNS = "user_id, name, email, password_hash, birth_date"


class UserDirectory:
    def __init__(self, db: Database) -> None:
        self.db = db

    def _fetch_one(self, sql: str, params: tuple) -> Optional[User]:
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
        return User.from_row(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive lookup by email."""
        return self._fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE email = %s;", (email,))

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE user_id = %s;", (user_id,))

    def find_by_email_and_birth_date(self, email: str, birth_date: date) -> Optional[User]:
        """Return the user only if both email and birth date match the same row."""
        sql = f"SELECT {USER_COLUMNS} FROM users WHERE email = %s AND birth_date = %s;"
        return self._fetch_one(sql, (email, birth_date))

    def create(self, name: str, email: str, password_hash: str, birth_date: date) -> User:
        """
        Insert a new user.

        Raises:
            DuplicateEmail: If the email is already registered.
        """
        sql = f"""
            INSERT INTO users (name, email, password_hash, birth_date)
            VALUES (%s, %s, %s, %s)
            RETURNING {USER_COLUMNS};
        """
        with self.db.connection() as conn:
            with conn.cursor() as cur:
                try:
                    cur.execute(sql, (name, email, password_hash, birth_date))
                except psycopg2.errors.UniqueViolation as e:
                    raise DuplicateEmail() from e
                row = cur.fetchone()
        return User.from_row(row)

    def update_password(self, user_id: int, new_hash: str) -> User:
        """
        Replace the stored password hash.

        Raises:
            NotFound: If no user has this id.
        """
        sql = f"UPDATE users SET password_hash = %s WHERE user_id = %s RETURNING {USER_COLUMNS};"
        user = self._fetch_one(sql, (new_hash, user_id))
        if user is None:
            raise NotFound("User not found")
        return user

    def delete_by_id(self, user_id: int, conn: Optional[PgConnection] = None) -> bool:
        """
        Delete a user row.

        Args:
            user_id (int): Target user.
            conn (connection, optional): Join an enclosing transaction.

        Returns:
            bool: True if a row was removed.
        """
        with self.db.connection(conn) as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM users WHERE user_id = %s;", (user_id,))
                return cur.rowcount > 0
