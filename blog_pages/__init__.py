"""Content model for a Jekyll-style blog build.

This package loads the site's ``_config.yml`` into an immutable configuration
and turns the posts under ``_posts`` into the ordered page collection, tag
index, and pagination windows that the static-site renderer consumes.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blog_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
