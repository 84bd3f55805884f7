"""HTTP API."""

from tongate.api.app import create_app

__all__ = ["create_app"]
