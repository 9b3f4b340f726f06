import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import config
from core.exceptions import BaseAPIException
from db import get_connection
from routes import contact_bp, dashboard_bp, menu_bp, orders_bp, stats_bp

logging.basicConfig(
    level=getattr(logging, config.app.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    """
    Application factory.

    Tests call create_app() after pointing db.init_engine() at a throwaway
    database, each getting a fully isolated Flask instance.
    """
    config.validate()
    app = Flask(__name__)

    # ------------------------------------------------------------------ #
    # Blueprints                                                           #
    # ------------------------------------------------------------------ #
    app.register_blueprint(contact_bp)
    app.register_blueprint(menu_bp,      url_prefix="/api/v1/menu")
    app.register_blueprint(orders_bp,    url_prefix="/api/v1/orders")
    app.register_blueprint(stats_bp,     url_prefix="/api/v1/stats")
    app.register_blueprint(dashboard_bp, url_prefix="/api/v1/dashboard")

    # The static front end is served from another origin during development
    @app.after_request
    def allow_cross_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = f"Content-Type, {config.security.token_header}"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, DELETE, OPTIONS"
        return response

    # ------------------------------------------------------------------ #
    # Error handlers: consistent JSON error envelope                      #
    # ------------------------------------------------------------------ #
    @app.errorhandler(BaseAPIException)
    def api_error(e):
        logger.warning(f"{e.error_code}: {e.internal_message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"success": False, "error": str(e.description)}), 400

    @app.errorhandler(401)
    def unauthorized(e):
        return jsonify({"success": False, "error": str(e.description)}), 401

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"success": False, "error": str(e.description)}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "error": str(e.description)}), 405

    @app.errorhandler(SQLAlchemyError)
    def db_error(e):
        logger.error(f"Unhandled database error: {e}")
        return jsonify({"success": False, "error": "A database error occurred."}), 500

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"success": False, "error": "An internal server error occurred."}), 500

    @app.get("/")
    def index():
        return f"Flask server running for {config.app.site_name}."

    @app.get("/health")
    def health():
        """Liveness + readiness probe. Returns 503 if DB is unreachable."""
        try:
            with get_connection() as conn:
                conn.execute(text("SELECT 1"))
            return jsonify({
                "status": "ok",
                "database": "reachable",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }), 200
        except SQLAlchemyError as exc:
            logger.error(f"Health check failed: {exc}")
            return jsonify({"status": "error", "database": "unreachable"}), 503

    return app


if __name__ == "__main__":
    application = create_app()
    application.run(debug=config.app.debug, host=config.app.host, port=config.app.port)
