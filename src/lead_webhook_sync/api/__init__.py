"""
API package for the lead webhook sync service.

This package contains the FastAPI webhook receiver and the signature gate
that protects it.
"""

from .app import create_app

__all__ = ["create_app"]
