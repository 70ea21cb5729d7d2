"""Listener system for gqlservlet.

Key components:
- ServletListener: Observer with an on_request hook
- RequestCallback: Per-request success/error/finally continuation
- ListenerRegistry: Ordered set of registered listeners
"""

from .base import RequestCallback, ServletListener
from .registry import ListenerRegistry


__all__ = ["ListenerRegistry", "RequestCallback", "ServletListener"]
