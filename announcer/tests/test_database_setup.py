import pytest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from announcer.database import db_connection, init_db


def test_get_db_requires_url(mocker):
    mocker.patch.object(db_connection.config, "DATABASE_URL", None)

    with pytest.raises(RuntimeError):
        db_connection.get_db()


def test_get_db_connects(mocker):
    connect = mocker.patch("announcer.database.db_connection.psycopg2.connect")

    conn = db_connection.get_db("postgresql://localhost/events")

    connect.assert_called_once_with("postgresql://localhost/events")
    assert conn is connect.return_value
    assert conn.cursor_factory is db_connection.RealDictCursor


def test_get_db_reraises_connection_errors(mocker):
    mocker.patch("announcer.database.db_connection.psycopg2.connect", side_effect=RuntimeError("refused"))

    with pytest.raises(RuntimeError):
        db_connection.get_db("postgresql://localhost/events")


def test_init_postgres_creates_table():
    mock_conn = MagicMock()
    mock_cursor = MagicMock()
    mock_conn.__enter__.return_value = mock_conn
    mock_cursor.__enter__.return_value = mock_cursor
    mock_conn.cursor.return_value = mock_cursor

    init_db.init_postgres(connect=lambda: mock_conn)

    assert "CREATE TABLE IF NOT EXISTS events" in mock_cursor.execute.call_args[0][0]
    mock_conn.close.assert_called_once()


def test_init_dynamodb_creates_table():
    client = MagicMock()

    init_db.init_dynamodb(client)

    kwargs = client.create_table.call_args.kwargs
    assert kwargs["TableName"] == init_db.config.EVENTS_TABLE
    assert kwargs["KeySchema"] == [{"AttributeName": "id", "KeyType": "HASH"}]
    client.get_waiter.assert_called_once_with("table_exists")


def test_init_dynamodb_existing_table():
    client = MagicMock()
    client.create_table.side_effect = ClientError(
        {"Error": {"Code": "ResourceInUseException", "Message": "exists"}}, "CreateTable")

    init_db.init_dynamodb(client)

    client.get_waiter.assert_not_called()


def test_init_dynamodb_other_errors_raise():
    client = MagicMock()
    client.create_table.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "no"}}, "CreateTable")

    with pytest.raises(ClientError):
        init_db.init_dynamodb(client)


def test_init_db_unknown_backend():
    with pytest.raises(ValueError):
        init_db.init_db("sqlite")
