"""
Bible Study Hub API package.

Provides the FastAPI application for bible study groups and user management.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
