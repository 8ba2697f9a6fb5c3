"""Pydantic schemas for API request/response documentation and serialization."""
