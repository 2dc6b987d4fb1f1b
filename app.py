"""
app.py
──────
Shipment Analytics Engine: application entry point.

Startup sequence:
  1. Configure logging
  2. Create Dash app with DARKLY bootstrap theme
  3. Register callbacks and the JSON API route
  4. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc
from flask import jsonify, request

from config.settings import settings
from src.layout.main import create_layout
from src.services.handler import handle_request

# ── 1. Logging ────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ── 2. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Shipment Analytics",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 3. Register callbacks + API ───────────────────────────────────────────────
from src.callbacks import analysis

analysis.register(app)


@server.route("/api/trip-analysis", methods=["POST"])
def trip_analysis():
    status, body = handle_request(request.get_json(silent=True))
    return jsonify(body), status


# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    logger.info("Starting Shipment Analytics on %s:%d", settings.HOST, settings.PORT)
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
