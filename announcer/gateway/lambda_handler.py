"""
AWS Lambda entrypoint for API Gateway proxy integrations.

Deploy with handler `announcer.gateway.lambda_handler.handler`. The same
function serves all three routes; API Gateway's `resource` (or `path`) picks
the handler from ROUTES.
"""

import base64
import json
import logging
from typing import Any, Dict, Optional

from announcer.gateway.context import HandlerContext, build_context
from announcer.gateway.registry import NOT_FOUND_BODY, PREFLIGHT_BODY, cors_headers, dispatch, find_route


def _response(status: int, body: Any, headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json", **headers},
        "body": json.dumps(body),
    }


def handler(event: Dict[str, Any], context: Any, handler_context: Optional[HandlerContext] = None) -> Dict[str, Any]:
    """
    Handle one API Gateway proxy event.

    Args:
        event (dict): API Gateway proxy event.
        context: Lambda context (unused).
        handler_context (HandlerContext, optional): Collaborators to use.
            Built fresh from configuration when omitted.

    Returns:
        dict: Proxy response with statusCode, headers and a JSON body.
    """
    path = event.get("resource") or event.get("path") or ""
    method = (event.get("httpMethod") or "").upper()

    route = find_route(path)
    if route is None:
        return _response(404, NOT_FOUND_BODY, {"Access-Control-Allow-Origin": "*"})

    headers = cors_headers(route)

    if method == "OPTIONS":
        return _response(200, PREFLIGHT_BODY, headers)

    if method != route.method:
        return _response(405, {"message": "Method not allowed"}, headers)

    logging.info(f"[Lambda] {method} {route.path}")

    raw_body = event.get("body")
    if raw_body and event.get("isBase64Encoded"):
        # Left as bytes; parse_body rejects anything that is not JSON text
        try:
            raw_body = base64.b64decode(raw_body)
        except ValueError:
            return _response(400, {"message": "Request body must be a JSON object"}, headers)

    ctx = handler_context or build_context()
    body, status = dispatch(route, ctx, raw_body, event.get("queryStringParameters") or {})
    return _response(status, body, headers)
