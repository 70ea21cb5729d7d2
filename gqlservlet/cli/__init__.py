"""Command line interface for gqlservlet."""

from .main import app, main


__all__ = ["app", "main"]
