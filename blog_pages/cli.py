"""Cyclopts CLI entrypoint for checking and building the blog's content model.

The ``blog-pages`` console script defined here loads ``_config.yml``,
discovers posts under ``_posts``, and reports the derived page collection,
skipped files, and pagination windows the rendering engine will receive.
Typical usage runs ``blog-pages build`` locally or in CI before handing the
site to the static-site tool, and ``blog-pages check`` to validate the
configuration alone.

Examples
--------
Build the collection for the site in the current directory:

>>> from blog_pages.cli import main
>>> main()  # doctest: +SKIP

Write a JSON manifest of the derived collections:

>>> from blog_pages.cli import app
>>> app(["build", "--manifest", "build/manifest.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .content import build_collection, discover_posts
from .manifest import write_manifest

DEFAULT_CONFIG = Path("_config.yml")

app = App(name="blog-pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Build the post collection and report the derived output.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    source: typ.Annotated[
        Path | None,
        Parameter(
            help="Site root containing _posts (defaults to the config folder)",
            env_var="INPUT_SOURCE",
        ),
    ] = None,
    manifest: typ.Annotated[
        Path | None,
        Parameter(help="Write a JSON manifest here", env_var="INPUT_MANIFEST"),
    ] = None,
    workers: typ.Annotated[
        int, Parameter(help="Parse posts on this many threads")
    ] = 1,
    verbose: bool = False,
) -> None:
    """Build pages, tag index, and pagination for the configured site.

    Parameters
    ----------
    config : Path, optional
        Path to the ``_config.yml`` document (overridable via
        ``INPUT_CONFIG``).
    source : Path or None, optional
        Site root holding the ``_posts`` directory; defaults to the folder
        containing ``config``.
    manifest : Path or None, optional
        When provided, the derived collections are written there as JSON.
    workers : int, optional
        Number of threads used to parse post files.
    verbose : bool, optional
        Emit INFO-level build logs.

    Returns
    -------
    None
        Prints one line per page, skipped file, and pagination window.

    Raises
    ------
    ConfigError
        If the configuration cannot be loaded.
    BuildError
        If the derived collections cannot be built consistently.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    site_root = source or config.parent
    result = build_collection(
        discover_posts(site_root),
        site_config,
        source_root=site_root,
        max_workers=workers,
    )
    for page in result.pages:
        print(f"{page.date:%Y-%m-%d} {page.slug} -> {page.url}")
    for error in result.errors:
        print(f"skipped {error.path}: {error.reason}")
    for window in result.pagination:
        print(f"page {window.number}/{window.total_pages} {window.path}")
    print(
        f"{len(result.pages)} pages, {len(result.tag_index)} tags, "
        f"{len(result.errors)} skipped"
    )
    if manifest:
        written = write_manifest(manifest, result, site_config)
        print(f"wrote {_format_path(written)}")


@app.command(help="Validate the site configuration without reading posts.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Load the configuration and print its identity and plugin list."""
    site_config = load_site_config(config)
    print(f"title: {site_config.title}")
    print(f"paginate: {site_config.paginate} ({site_config.paginate_path})")
    print(f"plugins: {', '.join(site_config.plugins) or '(none)'}")
    print(f"default rules: {len(site_config.defaults)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``blog-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
