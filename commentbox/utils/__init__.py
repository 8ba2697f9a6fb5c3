"""Utility modules for the comment service."""
