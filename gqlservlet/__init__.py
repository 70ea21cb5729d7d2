"""GraphQL request-lifecycle adapter with isolated listener hooks."""

from ._version import __version__


__all__ = ["__version__"]
