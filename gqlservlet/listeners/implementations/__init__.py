"""Built-in listener implementations."""

from .logging import RequestLoggingListener


__all__ = ["RequestLoggingListener"]
