"""Dancify admin console package entry.

This lightweight package provides a stable module entrypoint (python -m dancify)
while keeping the top-level packages (app/, core/, services/, ui/, infra/)
intact.
"""

from dancify.version import __version__  # single source of truth

__all__ = ["__version__"]
