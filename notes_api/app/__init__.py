"""
Application package initializer.

The package is split into a persistence and query layer and a thin
HTTP surface on top of it.  ``core`` holds configuration, logging,
errors and the key‑value storage collaborator; ``services`` holds the
account directory, the per‑user note store and the pure query helpers;
``api`` exposes those services under versioned routers.

Services never import from ``api``.  Any other presentation layer can
call the services directly with an explicit username.
"""

from .main import app  # noqa: F401
