"""
Page controller: turns form submissions and page loads into API calls and
view models. Knows nothing about Flask or HTML; see pages.py for rendering.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from announcer import config
from announcer.events_service.dates import format_date

SUCCESS = "success"
ERROR = "error"


@dataclass
class Banner:
    kind: str
    text: str
    hide_after_ms: int


@dataclass
class EventCard:
    title: str
    date_label: str
    location: str
    description: str
    organizer: str


@dataclass
class EventsView:
    cards: List[EventCard] = field(default_factory=list)
    placeholder: Optional[str] = None


@dataclass
class SubmitResult:
    """
    banner: message to show.
    reset: True when the form should be cleared.
    values: field values to refill the form with when it is not cleared.
    """
    banner: Banner
    reset: bool = False
    values: Dict[str, str] = field(default_factory=dict)


def make_card(event: Dict[str, Any]) -> EventCard:
    return EventCard(
        title=event.get("title", ""),
        date_label=format_date(event.get("date")),
        location=event.get("location", ""),
        description=event.get("description", ""),
        organizer=event.get("organizer", ""),
    )


class PageController:
    def __init__(self, api, hide_after_ms: int = config.BANNER_HIDE_MS) -> None:
        self.api = api
        self.hide_after_ms = hide_after_ms

    def success(self, text: str) -> Banner:
        return Banner(SUCCESS, text, self.hide_after_ms)

    def error(self, text: str) -> Banner:
        return Banner(ERROR, text, self.hide_after_ms)

    def submit_subscription(self, form: Mapping[str, str]) -> SubmitResult:
        email = (form.get("email") or "").strip()
        if not email:
            return SubmitResult(self.error("Please enter your email address."))

        try:
            self.api.subscribe_user(email)
        except Exception:
            return SubmitResult(self.error("Failed to subscribe. Please try again later."), values={"email": email})

        return SubmitResult(self.success("Successfully subscribed to event notifications!"), reset=True)

    def submit_event(self, form: Mapping[str, str]) -> SubmitResult:
        event_data = {
            "title": (form.get("title") or "").strip(),
            "description": (form.get("description") or "").strip(),
            "date": form.get("date") or "",
            "location": (form.get("location") or "").strip(),
            "organizer": (form.get("organizer") or "").strip(),
        }

        if not all(event_data[k] for k in ("title", "description", "date", "location")):
            return SubmitResult(self.error("Please fill in all required fields."), values=event_data)

        try:
            self.api.create_event(event_data)
        except Exception:
            return SubmitResult(self.error("Failed to create event. Please try again later."), values=event_data)

        return SubmitResult(self.success("Event created successfully!"), reset=True)

    def load_events(self, from_date: Optional[str] = None) -> EventsView:
        try:
            events = self.api.get_events(from_date)
        except Exception as e:
            logging.error(f"Error loading events: {e}")
            return EventsView(placeholder="Error loading events. Please try again later.")

        if not events:
            return EventsView(placeholder="No events found.")

        return EventsView(cards=[make_card(event) for event in events])
