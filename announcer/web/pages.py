"""
Rendering adapter: Flask routes and Jinja templates around PageController.
"""

from flask import Blueprint, current_app, render_template, request

pages_bp = Blueprint("pages", __name__, template_folder="templates")


def _controller():
    return current_app.extensions["page_controller"]


@pages_bp.route("/", methods=["GET"])
@pages_bp.route("/index.html", methods=["GET"])
def index():
    return render_template("index.html", banner=None, values={})


@pages_bp.route("/subscribe", methods=["POST"])
def subscribe():
    result = _controller().submit_subscription(request.form)
    values = {} if result.reset else result.values
    return render_template("index.html", banner=result.banner, values=values)


@pages_bp.route("/create-event", methods=["GET"])
@pages_bp.route("/create-event.html", methods=["GET"])
def create_event_form():
    return render_template("create_event.html", banner=None, values={})


@pages_bp.route("/create-event", methods=["POST"])
def create_event():
    result = _controller().submit_event(request.form)
    values = {} if result.reset else result.values
    return render_template("create_event.html", banner=result.banner, values=values)


@pages_bp.route("/events", methods=["GET"])
@pages_bp.route("/events.html", methods=["GET"])
def events():
    view = _controller().load_events(request.args.get("fromDate") or None)
    return render_template("events.html", banner=None, view=view)
