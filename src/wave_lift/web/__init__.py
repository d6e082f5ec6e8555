"""Web API for wave-lift."""

from .app import create_app

__all__ = ["create_app"]
