"""API module with FastAPI application."""

from newsdesk.api.app import app, create_app

__all__ = ["app", "create_app"]
