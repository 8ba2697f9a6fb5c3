"""Flask application factory for the comment service."""

import logging
from typing import Any

from flask import Response, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from commentbox.app import App
from commentbox.config import Settings, get_settings
from commentbox.extensions import db
from commentbox.services.container import ServiceContainer
from commentbox.utils.error_handling import mark_request_failed

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type"]


def create_app(settings: Settings | None = None) -> App:
    """Create and configure Flask application."""
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = get_settings()

    # Reject insecure configuration before anything is served
    settings.validate_production_config()

    app.config.from_object(settings)

    # Configure logging
    debug_mode = settings.FLASK_ENV in ("development", "testing")
    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Initialize Flask-SQLAlchemy
    db.init_app(app)

    # Import models to register them with SQLAlchemy
    from commentbox import models  # noqa: F401

    # Initialize SessionLocal for per-request sessions
    # This needs to be done in app context since db.engine requires it
    with app.app_context():
        from sqlalchemy.orm import Session, sessionmaker

        SessionLocal: sessionmaker[Session] = sessionmaker(
            class_=Session,
            bind=db.engine,
            autoflush=True,
            expire_on_commit=False,
        )

    # Initialize SpecTree for OpenAPI docs
    from commentbox.utils.spectree_config import configure_spectree

    configure_spectree(app)

    # Initialize service container
    container = ServiceContainer()
    container.config.override(settings)
    container.session_maker.override(SessionLocal)

    # Wire container with API modules
    wire_modules = [
        "commentbox.api.comments",
        "commentbox.api.pages",
    ]

    container.wire(modules=wire_modules)

    app.container = container

    # Runs after Flask-CORS, which only sends these on full preflight requests
    @app.after_request
    def add_cors_policy_headers(response: Response) -> Response:
        """Advertise the allowed methods and headers on every response."""
        response.headers.setdefault("Access-Control-Allow-Methods", ", ".join(CORS_METHODS))
        response.headers.setdefault("Access-Control-Allow-Headers", ", ".join(CORS_ALLOW_HEADERS))
        return response

    # Configure CORS
    CORS(
        app,
        origins=settings.CORS_ORIGINS,
        methods=CORS_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        send_wildcard=True,
    )

    # Register main API blueprint
    from commentbox.api import api_bp

    app.register_blueprint(api_bp)

    # Register HTML pages and setup at root
    from commentbox.api.pages import FALLBACK_TEXT, pages_bp

    app.register_blueprint(pages_bp)

    # Register metrics blueprint (at root, not under /api)
    from commentbox.api.metrics import metrics_bp

    app.register_blueprint(metrics_bp)

    @app.before_request
    def handle_preflight() -> Response | None:
        """Answer every OPTIONS request with an empty body; Flask-CORS adds the headers."""
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    @app.errorhandler(404)
    def handle_unmatched(error: Any) -> tuple[str, int, dict[str, str]]:
        """Generic fallback for paths no route handles."""
        return FALLBACK_TEXT, 404, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(405)
    def handle_method_not_allowed(error: Any) -> tuple[str, int, dict[str, str]]:
        """Plain-text answer for known paths requested with an unsupported method."""
        return "Method not allowed", 405, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> Any:
        """Last-resort handler; detail goes to the log, never to the client."""
        if isinstance(error, HTTPException):
            return error

        mark_request_failed()
        logger.error("Unhandled exception on %s %s", request.method, request.path, exc_info=error)
        return {"error": "Internal server error"}, 500

    # Request teardown handler for database session management
    @app.teardown_request
    def close_session(exc: Exception | None) -> None:
        """Close the database session after each request."""
        try:
            db_session = container.db_session()
            needs_rollback = db_session.info.get("needs_rollback", False)

            if exc or needs_rollback:
                db_session.rollback()
            else:
                db_session.commit()

            # Clear rollback flag after processing
            db_session.info.pop("needs_rollback", None)
            db_session.close()

        finally:
            # Ensure the scoped session is removed after each request
            container.db_session.reset()

    return app
