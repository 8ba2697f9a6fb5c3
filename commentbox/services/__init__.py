"""Service layer for the comment service."""
