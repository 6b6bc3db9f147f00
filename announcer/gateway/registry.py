"""
Route registration table and framework-free dispatch.

Both the Flask gateway and the Lambda adapter read ROUTES and call dispatch(),
so validation and error mapping behave the same under either host.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from announcer.errors import DependencyError, ValidationError
from announcer.events_service.handlers import create_event, list_events
from announcer.gateway.context import ApiRequest, HandlerContext
from announcer.subscriptions_service.handlers import subscribe_user


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: Callable[[HandlerContext, ApiRequest], Tuple[Any, int]]
    failure_message: str
    expects_body: bool = False


ROUTES = [
    Route("POST", "/event", create_event, "Failed to create event", expects_body=True),
    Route("GET", "/events", list_events, "Failed to retrieve events"),
    Route("POST", "/subscribe", subscribe_user, "Failed to subscribe user", expects_body=True),
]

PREFLIGHT_BODY = {"message": "CORS preflight request successful"}
NOT_FOUND_BODY = {"message": "Not found"}


def find_route(path: str) -> Optional[Route]:
    path = path.rstrip("/") or "/"
    for route in ROUTES:
        if route.path == path:
            return route
    return None


def cors_headers(route: Route) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": f"OPTIONS,{route.method}",
    }


def parse_body(raw: Optional[Union[str, bytes]]) -> Dict[str, Any]:
    """
    Decode a JSON request body (text or raw bytes). An empty body decodes to {}.

    Raises:
        ValidationError: The body is not a JSON object.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        # UnicodeDecodeError is a ValueError
        raise ValidationError("Request body must be a JSON object") from None
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def dispatch(route: Route, ctx: HandlerContext, raw_body: Optional[Union[str, bytes]] = None,
             query: Optional[Mapping[str, str]] = None) -> Tuple[Any, int]:
    """
    Run one handler and map its outcome to (body, status).

    Returns:
        The handler's own (body, status) on success,
        ({"message"}, 400) on ValidationError,
        ({"message", "error", ...}, 500) on any other failure.
    """
    try:
        body = parse_body(raw_body) if route.expects_body else {}
        req = ApiRequest(body=body, query=dict(query or {}))
        return route.handler(ctx, req)
    except ValidationError as e:
        logging.info(f"[Gateway] {route.method} {route.path} rejected: {e.message}")
        return {"message": e.message}, 400
    except DependencyError as e:
        logging.exception(f"[Gateway] {route.method} {route.path} failed: {e.message}")
        return e.to_body(), 500
    except Exception as e:
        logging.exception(f"[Gateway] {route.method} {route.path} failed unexpectedly")
        return {"message": route.failure_message, "error": str(e)}, 500
