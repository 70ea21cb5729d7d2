"""Servlet services: configuration, handlers, dispatch and the servlet facade.

Import from the submodules directly; this package does not re-export them so
that :mod:`gqlservlet.services.http` stays importable from the execution layer.
"""
