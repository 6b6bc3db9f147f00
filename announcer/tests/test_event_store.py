import pytest
from decimal import Decimal
from unittest.mock import MagicMock

from boto3.dynamodb.conditions import Attr

from announcer.database import event_store
from announcer.database.event_store import DynamoEventStore, PostgresEventStore, build_event_store

RECORD = {
    "id": "evt_1",
    "title": "Meetup",
    "description": "Talk",
    "date": "2025-03-01T18:00:00Z",
    "location": "Hall A",
    "organizer": "Anonymous",
    "createdAt": "2025-01-01T00:00:00.000Z",
}


@pytest.fixture
def mock_pg():
    """
    Mocks the postgres connection and cursor.
    """
    mock_conn = MagicMock()
    mock_cursor = MagicMock()
    mock_conn.__enter__.return_value = mock_conn
    mock_conn.__exit__.return_value = None
    mock_cursor.__enter__.return_value = mock_cursor
    mock_cursor.__exit__.return_value = None
    mock_conn.cursor.return_value = mock_cursor
    return mock_conn, mock_cursor


def test_dynamo_put():
    table = MagicMock()
    DynamoEventStore(table).put(RECORD)
    table.put_item.assert_called_once_with(Item=RECORD)


def test_dynamo_scan_follows_pagination():
    table = MagicMock()
    table.scan.side_effect = [
        {"Items": [{"id": "a"}], "LastEvaluatedKey": {"id": "a"}},
        {"Items": [{"id": "b"}]},
    ]

    items = DynamoEventStore(table).scan()

    assert items == [{"id": "a"}, {"id": "b"}]
    first, second = table.scan.call_args_list
    assert first.kwargs == {}
    assert second.kwargs == {"ExclusiveStartKey": {"id": "a"}}


def test_dynamo_scan_with_from_date():
    table = MagicMock()
    table.scan.return_value = {"Items": []}

    DynamoEventStore(table).scan(from_date="2024-01-01")

    kwargs = table.scan.call_args.kwargs
    assert kwargs["FilterExpression"] == Attr("date").gte("2024-01-01")


def test_dynamo_scan_error_propagates():
    table = MagicMock()
    table.scan.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        DynamoEventStore(table).scan()


def test_postgres_put(mock_pg):
    mock_conn, mock_cursor = mock_pg

    PostgresEventStore(connect=lambda: mock_conn).put(RECORD)

    sql, params = mock_cursor.execute.call_args[0]
    assert "INSERT INTO events" in sql
    assert params == ("evt_1", "Meetup", "Talk", "2025-03-01T18:00:00Z", "Hall A", "Anonymous",
                      "2025-01-01T00:00:00.000Z")
    mock_conn.__exit__.assert_called_once()
    mock_conn.close.assert_called_once()


def test_postgres_scan_all(mock_pg):
    mock_conn, mock_cursor = mock_pg
    mock_cursor.fetchall.return_value = [RECORD]

    rows = PostgresEventStore(connect=lambda: mock_conn).scan()

    sql, params = mock_cursor.execute.call_args[0]
    assert "WHERE" not in sql
    assert params == []
    assert rows == [RECORD]
    mock_conn.close.assert_called_once()


def test_postgres_scan_from_date(mock_pg):
    mock_conn, mock_cursor = mock_pg
    mock_cursor.fetchall.return_value = []

    PostgresEventStore(connect=lambda: mock_conn).scan(from_date="2024-01-01")

    sql, params = mock_cursor.execute.call_args[0]
    assert '"date" >= %s' in sql
    assert params == ["2024-01-01"]


def test_postgres_connection_closed_on_error(mock_pg):
    mock_conn, mock_cursor = mock_pg
    mock_cursor.execute.side_effect = RuntimeError("relation does not exist")

    with pytest.raises(RuntimeError):
        PostgresEventStore(connect=lambda: mock_conn).scan()

    mock_conn.close.assert_called_once()


def test_build_event_store_dynamodb(mocker):
    mock_boto3 = mocker.patch.object(event_store, "boto3")

    store = build_event_store("dynamodb")

    assert isinstance(store, DynamoEventStore)
    mock_boto3.resource.assert_called_once_with("dynamodb", region_name=event_store.config.AWS_REGION)
    mock_boto3.resource.return_value.Table.assert_called_once_with(event_store.config.EVENTS_TABLE)


def test_build_event_store_postgres():
    assert isinstance(build_event_store("postgres"), PostgresEventStore)


def test_build_event_store_unknown():
    with pytest.raises(ValueError):
        build_event_store("redis")


def test_dynamo_put_converts_floats():
    table = MagicMock()

    DynamoEventStore(table).put(dict(RECORD, organizer=1.5, location={"floor": 2.25, "room": 3}))

    item = table.put_item.call_args.kwargs["Item"]
    assert item["organizer"] == Decimal("1.5")
    assert item["location"] == {"floor": Decimal("2.25"), "room": 3}
    assert item["title"] == "Meetup"


def test_dynamo_scan_converts_decimals():
    table = MagicMock()
    table.scan.return_value = {"Items": [{"id": "a", "organizer": Decimal("1.5"), "location": [Decimal("3")]}]}

    items = DynamoEventStore(table).scan()

    assert items == [{"id": "a", "organizer": 1.5, "location": [3]}]
    assert isinstance(items[0]["location"][0], int)
