"""
Frontend server: renders the subscribe, create-event and events pages.
Talks to the API gateway over HTTP through EventsApiClient.
"""

import logging

from flask import Flask

from announcer import config
from announcer.client.api import EventsApiClient
from announcer.web.controller import PageController
from announcer.web.pages import pages_bp


def create_frontend_app(api=None, hide_after_ms: int = config.BANNER_HIDE_MS) -> Flask:
    """
    Application factory for the page layer.

    Args:
        api: Object with subscribe_user, get_events and create_event.
            Defaults to an EventsApiClient pointed at API_URL.
        hide_after_ms (int): Banner auto-hide delay.
    """
    app = Flask(__name__)
    app.extensions["page_controller"] = PageController(api or EventsApiClient(), hide_after_ms)
    app.register_blueprint(pages_bp)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app = create_frontend_app()
    app.run(host="0.0.0.0", port=config.FRONTEND_PORT, debug=True)
