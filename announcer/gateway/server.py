"""
API gateway: serves the event and subscription routes over Flask.
This is the local entrypoint for development.
"""

import logging
import re
from typing import Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from announcer import config
from announcer.gateway.context import HandlerContext, build_context
from announcer.gateway.registry import NOT_FOUND_BODY, ROUTES, Route, dispatch


def _make_view(route: Route, ctx: HandlerContext):
    def view():
        raw_body = request.get_data(as_text=True) if route.expects_body else None
        body, status = dispatch(route, ctx, raw_body, request.args.to_dict())
        return jsonify(body), status
    return view


def create_app(ctx: Optional[HandlerContext] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        ctx (HandlerContext, optional): Store and notifier to use.
            Built from configuration when omitted.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    if ctx is None:
        ctx = build_context()

    # One CORS resource per route so each preflight advertises only its own method
    CORS(app,
         resources={
             rf"^{re.escape(route.path)}$": {"methods": ["OPTIONS", route.method]}
             for route in ROUTES
         },
         origins="*",
         send_wildcard=True,
         allow_headers=["Content-Type"])

    # --- REGISTER ROUTES ---
    for route in ROUTES:
        app.add_url_rule(
            route.path,
            endpoint=route.handler.__name__,
            view_func=_make_view(route, ctx),
            methods=[route.method],
        )

    # --- REQUEST LOGGING ---
    @app.before_request
    def before_request() -> None:
        logging.info(f"[Gateway] Incoming {request.method} {request.path}")

    @app.after_request
    def after_request(response: Response) -> Response:
        logging.info(f"[Gateway] Response {response.status}")
        return response

    @app.errorhandler(404)
    def not_found(error):
        return jsonify(NOT_FOUND_BODY), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"message": "Method not allowed"}), 405

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    # Basic console logging during API requests
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app = create_app()
    app.run(host="0.0.0.0", port=config.GATEWAY_PORT, debug=True)
