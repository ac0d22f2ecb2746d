"""HTTP routes for the sales report service."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from salesreport.handler import Handler

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def create_app(handler: Handler) -> Flask:
    """Build the web application with its refresh and report routes."""
    app = Flask(__name__)
    app.json.sort_keys = False

    def _range() -> tuple[str, str]:
        return request.args.get("start_date", ""), request.args.get("end_date", "")

    @app.post("/refresh")
    def refresh():
        status, body = handler.refresh()
        return jsonify(body), status

    @app.get("/total/customers")
    def total_customers():
        status, body = handler.total_customers(*_range())
        return jsonify(body), status

    @app.get("/total/orders")
    def total_orders():
        status, body = handler.total_orders(*_range())
        return jsonify(body), status

    @app.get("/average/order_value")
    def average_value():
        status, body = handler.average_value(*_range())
        return jsonify(body), status

    return app


def start_application(
    handler: Handler, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> None:
    """Serve the application until interrupted."""
    app = create_app(handler)
    logger.info("Server is running on http://localhost:%d", port)
    app.run(host=host, port=port)