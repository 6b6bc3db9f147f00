"""
Events service handlers: create an event (store, then notify) and list events.

Handlers are framework-free. They take a HandlerContext and an ApiRequest and
return (body, status). ValidationError and DependencyError are raised for the
gateway to turn into 400 and 500 responses.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from announcer.errors import DependencyError, ValidationError
from announcer.events_service.dates import format_date, parse_dt, to_utc, utc_now_iso
from announcer.gateway.context import ApiRequest, HandlerContext

# --- CONSTANTS FOR VALIDATION ---
REQUIRED_FIELDS = ["title", "description", "date", "location"]
DEFAULT_ORGANIZER = "Anonymous"
SUBJECT_MAX_LENGTH = 100  # SNS rejects longer subjects

# Unparsable dates sort after every real date
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def generate_event_id() -> str:
    """Random 128-bit identifier, e.g. 'evt_3f2b...'."""
    return f"evt_{uuid.uuid4().hex}"


def build_notification(record: Dict[str, Any]) -> Tuple[str, str]:
    """
    Compose the (subject, message) announcing a new event.
    """
    subject = " ".join(f"New Event: {record['title']}".split())
    if len(subject) > SUBJECT_MAX_LENGTH:
        subject = subject[:SUBJECT_MAX_LENGTH - 3] + "..."

    message = "\n".join([
        f"New Event: {record['title']}",
        "",
        f"Date: {format_date(record['date'])}",
        f"Location: {record['location']}",
        "",
        f"{record['description']}",
        "",
        f"Organized by: {record['organizer']}",
    ])
    return subject, message


def create_event(ctx: HandlerContext, req: ApiRequest) -> Tuple[Dict[str, Any], int]:
    """
    Create an event and announce it on the notification topic.

    Expects a JSON body with:
    - title, description, date, location (required)
    - organizer (optional, defaults to "Anonymous")

    Returns:
        201: { "message": str, "event": record }

    Raises:
        ValidationError: A required field is missing or empty.
        DependencyError: The store write or the publish failed.
    """
    data = req.body

    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")

    record = {
        "id": generate_event_id(),
        "title": data["title"],
        "description": data["description"],
        "date": data["date"],
        "location": data["location"],
        "organizer": data.get("organizer") or DEFAULT_ORGANIZER,
        "createdAt": utc_now_iso(),
    }

    try:
        ctx.store.put(record)
    except Exception as e:
        raise DependencyError("Failed to create event", e) from e

    logging.info(f"[Events] Stored event {record['id']}")

    try:
        subject, message = build_notification(record)
        message_id = ctx.notifier.publish(subject, message)
    except Exception as e:
        # The record is already stored; report it alongside the failure
        raise DependencyError("Event created but notification failed", e, {"event": record}) from e

    logging.info(f"[Events] Published notification {message_id} for event {record['id']}")

    return {"message": "Event created successfully", "event": record}, 201


def sort_key(record: Dict[str, Any]) -> datetime:
    dt = parse_dt(record.get("date"))
    if dt is None:
        return _OLDEST
    try:
        return to_utc(dt)
    except OverflowError:
        # e.g. 0001-01-01T00:00:00+05:00 has no UTC equivalent
        return _OLDEST


def sort_events(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Newest first, by chronological date rather than string order."""
    return sorted(records, key=sort_key, reverse=True)


def list_events(ctx: HandlerContext, req: ApiRequest) -> Tuple[List[Dict[str, Any]], int]:
    """
    Return every event, newest first.

    Query:
    - fromDate (optional): keep only events whose date is >= fromDate.

    Returns:
        200: List of event records.

    Raises:
        DependencyError: The store scan failed.
    """
    from_date = req.query.get("fromDate") or None

    try:
        records = ctx.store.scan(from_date=from_date)
    except Exception as e:
        raise DependencyError("Failed to retrieve events", e) from e

    return sort_events(records), 200
