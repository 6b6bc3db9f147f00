"""
Collaborators handed to every request handler.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from announcer.database.event_store import build_event_store
from announcer.notifications.sns_client import build_notifier


@dataclass
class ApiRequest:
    """A decoded request: JSON body (already parsed) and query parameters."""
    body: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)


@dataclass
class HandlerContext:
    """
    store: object with put(record) and scan(from_date=None).
    notifier: object with publish(subject, message) and subscribe_email(address).
    """
    store: Any
    notifier: Any


def build_context() -> HandlerContext:
    """Construct the real store and notifier from configuration."""
    return HandlerContext(store=build_event_store(), notifier=build_notifier())
