"""
API utilities for the Event Announcement System.
Thin wrappers over the gateway's three routes.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from announcer import config


class ApiError(Exception):
    """The gateway answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Any = None) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code
        self.body = body


class EventsApiClient:
    """
    Calls the gateway over HTTP.

    Args:
        base_url (str, optional): Gateway URL. Defaults to API_URL.
        session (requests.Session, optional): Session to send requests with.
        timeout (float, optional): Per-request timeout in seconds.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None) -> None:
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
            **kwargs,
        )
        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = None
            raise ApiError(resp.status_code, body)
        return resp.json()

    def subscribe_user(self, email: str) -> Dict[str, Any]:
        """
        Subscribe a user to event notifications.

        Returns:
            dict: { "message": str, "subscriptionArn": str }
        """
        try:
            return self._request("POST", "/subscribe", json={"email": email})
        except Exception as e:
            logging.error(f"Error subscribing user: {e}")
            raise

    def get_events(self, from_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get all events, newest first.

        Args:
            from_date (str, optional): Only events dated on or after this value.
        """
        params = {"fromDate": from_date} if from_date else None
        try:
            return self._request("GET", "/events", params=params)
        except Exception as e:
            logging.error(f"Error fetching events: {e}")
            raise

    def create_event(self, event_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new event.

        Returns:
            dict: { "message": str, "event": dict }
        """
        try:
            return self._request("POST", "/event", json=event_data)
        except Exception as e:
            logging.error(f"Error creating event: {e}")
            raise
