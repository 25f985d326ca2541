"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The catalog core (store, query helpers and validation)
lives in ``services``; ``schemas`` holds the pydantic models shared by
the core and the HTTP layer, and ``api/v1`` exposes the routes.
"""

from .main import app  # noqa: F401
