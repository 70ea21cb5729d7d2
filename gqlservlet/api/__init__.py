"""API layer for gqlservlet."""

from .app import create_app


__all__ = ["create_app"]
