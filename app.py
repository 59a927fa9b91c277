"""
Stocky -- single-symbol stock dashboard, Flask backend.
Looks up one symbol on the stock service and renders its metrics,
price trend and BUY/SELL/HOLD suggestion.
"""
import os
import logging
from datetime import datetime

import pytz
from flask import Flask, render_template, jsonify, request, g, flash, has_request_context
from flask_cors import CORS

from dashboard import PresentationController
from market_session import resolve_session
from stock_client import StockClient

app = Flask(__name__)
app.config.from_object("config")
CORS(app, resources={r"/api/*": {"origins": "*"}})

print(f"[API] Using stock service: {app.config['STOCK_API_BASE_URL']}")


# ── Collaborators ──────────────────────────────────────────

def exchange_now():
    """Current wall-clock time in the exchange's timezone."""
    tz = pytz.timezone(app.config["MARKET_TIMEZONE"])
    return datetime.now(tz)


def notify(notification):
    """Deliver a notification to the request being served: flashed for the
    page, collected on `g` for JSON responses."""
    if not has_request_context():
        logging.info(f"Notification outside a request: {notification.message}")
        return
    if not request.path.startswith("/api/"):
        flash(notification.message, notification.kind)
    g.setdefault("notifications", []).append(notification)


def get_controller():
    controller = app.extensions.get("dashboard")
    if controller is None:
        client = StockClient(app.config["STOCK_API_BASE_URL"], timeout=app.config["STOCK_API_TIMEOUT"])
        controller = PresentationController(client.fetch, clock=exchange_now)
        controller.subscribe(notify)
        app.extensions["dashboard"] = controller
    return controller


# ── Routes ─────────────────────────────────────────────────

@app.route("/")
def index():
    controller = get_controller()
    symbol = request.args.get("symbol", "")
    if symbol:
        controller.search(symbol)

    # Session evaluated once per page load; the page may poll /api/session
    view = controller.view(exchange_now())
    return render_template(
        "index.html",
        view=view,
        symbol=symbol,
        trending=app.config["TRENDING_SYMBOLS"],
        poll_seconds=app.config["SESSION_POLL_SECONDS"],
    )


@app.route("/api/session")
def api_session():
    return jsonify(resolve_session(exchange_now()).to_dict())


@app.route("/api/dashboard/<symbol>")
def api_dashboard(symbol):
    controller = get_controller()
    try:
        applied = controller.search(symbol)
        view = controller.view(exchange_now())
    except Exception as e:
        logging.error(f"Dashboard error for {symbol}: {e}")
        return jsonify({"error": str(e)}), 500

    # A newer search replaced this one while it was in flight; the held
    # view belongs to that search, not to <symbol>
    if not applied:
        return jsonify({"error": f"Search for {symbol} was superseded by a newer search"}), 409

    data = view.to_dict()
    data["notifications"] = [n._asdict() for n in g.get("notifications", [])]
    if view.error:
        return jsonify(data), 502
    return jsonify(data)


# ── Entry point ────────────────────────────────────────────

if __name__ == "__main__":
    logging.basicConfig(level=app.config["LOG_LEVEL"], format="%(asctime)s %(levelname)s %(message)s")
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    app.run(host="0.0.0.0", port=port, debug=debug)
