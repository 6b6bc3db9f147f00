import pytest
from unittest.mock import MagicMock

from announcer.gateway.context import HandlerContext
from announcer.gateway.server import create_app


class MemoryEventStore:
    """In-process stand-in for the event table."""

    def __init__(self, records=None):
        self.records = list(records or [])

    def put(self, record):
        self.records.append(dict(record))

    def scan(self, from_date=None):
        if from_date:
            return [dict(r) for r in self.records if r["date"] >= from_date]
        return [dict(r) for r in self.records]


@pytest.fixture
def store():
    return MemoryEventStore()


@pytest.fixture
def notifier():
    """
    Mocks the SNS notifier.
    """
    mock_notifier = MagicMock()
    mock_notifier.publish.return_value = "msg-123"
    mock_notifier.subscribe_email.return_value = "pending confirmation"
    return mock_notifier


@pytest.fixture
def ctx(store, notifier):
    return HandlerContext(store=store, notifier=notifier)


@pytest.fixture
def app(ctx):
    app = create_app(ctx)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def event_payload():
    return {
        "title": "Meetup",
        "description": "Talk",
        "date": "2025-03-01T18:00:00Z",
        "location": "Hall A",
    }
