"""
Identity and access workflow.

Every operation is a short, stateless sequence of checks against the user
directory and event ledger, with the credential hasher involved wherever a
password is accepted or stored. Failures are raised as the typed errors in
`backend.errors` and left for the request boundary to render.

Known gaps kept on purpose:
- The userId returned by `verify_identity` is the only thing `reset_password`
  needs. It is not signed and does not expire.
- `delete_event` does not check who owns the event.
"""

import logging
import secrets
from datetime import date, datetime
from typing import Any, Dict, List

from backend.database.db_connection import Database
from backend.errors import EmailInUse, InvalidCredentials, InvalidPassword, NotFound
from backend.events_service.ledger import EventLedger
from backend.events_service.models import Event
from backend.users_service.directory import UserDirectory
from backend.users_service.models import User
from backend.users_service.security import CredentialHasher


class AccountWorkflow:
    """
    Account and event operations behind the /api/users and /api/events routes.

    Args:
        db (Database): Storage handle, used to group the account-deletion deletes.
        directory (UserDirectory): User records.
        ledger (EventLedger): Event records.
        hasher (CredentialHasher): Password hashing and verification.
    """

    def __init__(
        self,
        db: Database,
        directory: UserDirectory,
        ledger: EventLedger,
        hasher: CredentialHasher,
    ) -> None:
        self.db = db
        self.directory = directory
        self.ledger = ledger
        self.hasher = hasher
        # Verified against on unknown emails so both login failures cost the same
        self._dummy_hash = hasher.hash(secrets.token_urlsafe(32))

    # --- USERS ---
    def register(self, name: str, email: str, password: str, birth_date: date) -> User:
        """
        Create an account.

        Raises:
            EmailInUse: If the email is already registered.
        """
        if self.directory.find_by_email(email) is not None:
            raise EmailInUse()
        password_hash = self.hasher.hash(password)
        # The UNIQUE constraint still catches a concurrent registration
        user = self.directory.create(name, email, password_hash, birth_date)
        logging.info(f"[Users] Registered user_id={user.id}")
        return user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Check credentials.

        Returns:
            dict: {id, name, email} of the user.

        Raises:
            InvalidCredentials: Unknown email or wrong password (same error for both).
        """
        user = self.directory.find_by_email(email)
        if user is None:
            self.hasher.verify(password, self._dummy_hash)
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentials()

        if self.hasher.needs_rehash(user.password_hash):
            self.directory.update_password(user.id, self.hasher.hash(password))
            logging.info(f"[Users] Upgraded password hash for user_id={user.id}")

        return user.to_public_dict()

    def verify_identity(self, email: str, birth_date: date) -> int:
        """
        Confirm a user by email and birth date ahead of a password reset.

        Returns:
            int: The user's id, to be passed to `reset_password`.

        Raises:
            NotFound: If no single user matches both values.
        """
        user = self.directory.find_by_email_and_birth_date(email, birth_date)
        if user is None:
            raise NotFound("No account matches these details")
        return user.id

    def reset_password(self, user_id: int, new_password: str) -> None:
        """
        Set a new password. Gated only by a prior `verify_identity`.

        Raises:
            NotFound: If the user does not exist.
        """
        if self.directory.find_by_id(user_id) is None:
            raise NotFound("User not found")
        self.directory.update_password(user_id, self.hasher.hash(new_password))
        logging.info(f"[Users] Password reset for user_id={user_id}")

    def delete_own_account(self, user_id: int, password: str) -> int:
        """
        Delete a user and every event they own, after checking their password.

        Events go first, then the user, inside one transaction.

        Returns:
            int: Number of events removed with the account.

        Raises:
            NotFound: If the user does not exist.
            InvalidPassword: If the password does not match.
        """
        user = self.directory.find_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        if not self.hasher.verify(password, user.password_hash):
            raise InvalidPassword()

        with self.db.connection() as conn:
            removed_events = self.ledger.delete_all_by_owner(user_id, conn=conn)
            if not self.directory.delete_by_id(user_id, conn=conn):
                raise NotFound("User not found")

        logging.info(f"[Users] Deleted user_id={user_id} and {removed_events} event(s)")
        return removed_events

    # --- EVENTS ---
    def create_event(self, owner_id: int, event_name: str, venue: str, date_time: datetime) -> Event:
        """
        Store a new event for `owner_id`.

        Returns:
            Event: The created event with its id.
        """
        return self.ledger.create(owner_id, event_name, venue, date_time)

    def list_events(self, owner_id: int) -> List[Event]:
        """
        Returns:
            list: The owner's events, earliest first (empty if none).
        """
        return self.ledger.list_by_owner(owner_id)

    def delete_event(self, event_id: int) -> None:
        """
        Delete one event by id, whoever owns it.

        Raises:
            NotFound: If no event has this id.
        """
        if not self.ledger.delete_by_id(event_id):
            raise NotFound("Event not found")
