"""Command line interface for hpecom."""

from .main import app

__all__ = ["app"]
