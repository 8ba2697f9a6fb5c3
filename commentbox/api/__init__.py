"""API blueprints for the comment service."""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from commentbox.api.comments import comments_bp  # noqa: E402
from commentbox.api.health import health_bp  # noqa: E402

api_bp.register_blueprint(comments_bp)
api_bp.register_blueprint(health_bp)
