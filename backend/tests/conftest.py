import itertools
from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest

from backend.errors import DuplicateEmail, NotFound
from backend.events_service.models import Event
from backend.gateway.server import create_app
from backend.users_service.models import User
from backend.users_service.security import CredentialHasher
from backend.workflow import AccountWorkflow


class FakeDatabase:
    """Stands in for Database: counts transactions, hands out a marker connection."""

    def __init__(self):
        self.transactions = 0

    @contextmanager
    def connection(self, conn=None):
        if conn is not None:
            yield conn
            return
        self.transactions += 1
        yield object()

    def close(self):
        pass


class InMemoryUserDirectory:
    def __init__(self):
        self.users = {}
        self._ids = itertools.count(1)

    def find_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_id(self, user_id):
        return self.users.get(user_id)

    def find_by_email_and_birth_date(self, email, birth_date):
        user = self.find_by_email(email)
        return user if user and user.birth_date == birth_date else None

    def create(self, name, email, password_hash, birth_date):
        if self.find_by_email(email):
            raise DuplicateEmail()
        user = User(next(self._ids), name, email, password_hash, birth_date)
        self.users[user.id] = user
        return user

    def update_password(self, user_id, new_hash):
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        updated = User(user.id, user.name, user.email, new_hash, user.birth_date)
        self.users[user_id] = updated
        return updated

    def delete_by_id(self, user_id, conn=None):
        return self.users.pop(user_id, None) is not None


class InMemoryEventLedger:
    def __init__(self):
        self.events = {}
        self._ids = itertools.count(1)

    def create(self, owner_id, event_name, venue, date_time):
        event = Event(next(self._ids), owner_id, event_name, venue, date_time)
        self.events[event.id] = event
        return event

    def list_by_owner(self, owner_id):
        owned = [e for e in self.events.values() if e.owner_id == owner_id]
        return sorted(owned, key=lambda e: (e.date_time, e.id))

    def delete_by_id(self, event_id):
        return self.events.pop(event_id, None) is not None

    def delete_all_by_owner(self, owner_id, conn=None):
        owned = [e.id for e in self.events.values() if e.owner_id == owner_id]
        for event_id in owned:
            del self.events[event_id]
        return len(owned)


@pytest.fixture
def hasher():
    # Minimum Argon2 cost keeps the suite fast
    return CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def directory():
    return InMemoryUserDirectory()


@pytest.fixture
def ledger():
    return InMemoryEventLedger()


@pytest.fixture
def workflow(fake_db, directory, ledger, hasher):
    return AccountWorkflow(fake_db, directory, ledger, hasher)


@pytest.fixture
def app(workflow):
    app = create_app(workflow=workflow)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mock_db():
    """
    Mocks the Database handle, its connection and cursor.
    """
    db = MagicMock()
    mock_conn = db.connection.return_value.__enter__.return_value
    mock_cursor = mock_conn.cursor.return_value.__enter__.return_value
    return db, mock_conn, mock_cursor
