import pytest
import psycopg2

from backend.database.db_connection import Database
from backend.errors import InternalStorageError


@pytest.fixture
def pool(mocker):
    pool_cls = mocker.patch("backend.database.db_connection.ThreadedConnectionPool")
    pool = pool_cls.return_value
    pool.closed = False
    pool.getconn.return_value.closed = 0
    return pool


def test_pool_is_created_with_dict_rows(mocker):
    pool_cls = mocker.patch("backend.database.db_connection.ThreadedConnectionPool")

    Database("postgresql://localhost/test", 2, 5)

    args, kwargs = pool_cls.call_args
    assert args == (2, 5, "postgresql://localhost/test")
    assert kwargs["cursor_factory"] is psycopg2.extras.DictCursor


def test_connection_commits_and_returns_to_pool(pool):
    db = Database("postgresql://localhost/test")

    with db.connection() as conn:
        assert conn is pool.getconn.return_value

    conn.commit.assert_called_once()
    conn.rollback.assert_not_called()
    pool.putconn.assert_called_once_with(conn, close=False)


def test_driver_error_rolls_back_and_is_wrapped(pool):
    db = Database("postgresql://localhost/test")
    conn = pool.getconn.return_value

    with pytest.raises(InternalStorageError) as exc_info:
        with db.connection():
            raise psycopg2.OperationalError("server closed the connection")

    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)
    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    pool.putconn.assert_called_once()


def test_other_errors_roll_back_and_propagate(pool):
    db = Database("postgresql://localhost/test")
    conn = pool.getconn.return_value

    with pytest.raises(ValueError):
        with db.connection():
            raise ValueError("boom")

    conn.rollback.assert_called_once()
    pool.putconn.assert_called_once()


def test_broken_connection_is_discarded(pool):
    db = Database("postgresql://localhost/test")
    conn = pool.getconn.return_value
    conn.closed = 2

    with pytest.raises(InternalStorageError):
        with db.connection():
            raise psycopg2.InterfaceError("connection already closed")

    conn.rollback.assert_not_called()
    pool.putconn.assert_called_once_with(conn, close=True)


def test_pool_exhausted(pool):
    db = Database("postgresql://localhost/test")
    pool.getconn.side_effect = psycopg2.pool.PoolError("connection pool exhausted")

    with pytest.raises(InternalStorageError):
        with db.connection():
            pass


def test_outer_connection_is_joined(pool, mocker):
    db = Database("postgresql://localhost/test")
    outer = mocker.Mock()

    with db.connection(outer) as conn:
        assert conn is outer

    pool.getconn.assert_not_called()
    outer.commit.assert_not_called()


def test_from_env_requires_database_url(mocker):
    mocker.patch("backend.config.DATABASE_URL", None)

    with pytest.raises(RuntimeError):
        Database.from_env()


def test_close(pool):
    db = Database("postgresql://localhost/test")

    db.close()

    pool.closeall.assert_called_once()
