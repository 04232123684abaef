"""FastAPI web application for the short-link directory."""

from .app_factory import create_app

__all__ = ["create_app"]
