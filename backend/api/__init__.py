"""
AutoStyle API package.

Provides the FastAPI application for the AutoStyle accounts and orders service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
