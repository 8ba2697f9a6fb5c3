"""Project constants."""

PROJECT_NAME = "commentbox"
PROJECT_DESCRIPTION = "Flask backend for hosting page-scoped comments"
API_TITLE = "commentbox API"
API_DESCRIPTION = "Read, post and moderate comments attached to page URLs"
DEFAULT_BACKEND_PORT = 3101
