"""HTTP API for JavaSlice."""

from .server import create_app

__all__ = ["create_app"]
