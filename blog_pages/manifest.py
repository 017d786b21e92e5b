"""Serialise a build result into a JSON manifest for inspection.

The manifest mirrors what the rendering engine receives: site identity, each
page's metadata (bodies omitted), tag names mapped to page slugs, and the
pagination windows as slug lists. It is encoded with ``msgspec.json``.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.manifest import write_manifest
>>> write_manifest(Path("manifest.json"), result, site)  # doctest: +SKIP
PosixPath('manifest.json')
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import msgspec.json as msgspec_json

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .content import BuildResult, Page


def build_manifest(result: BuildResult, site_config: SiteConfig) -> dict[str, typ.Any]:
    """Return plain data describing the derived collections."""
    return {
        "site": {
            "title": site_config.title,
            "url": site_config.url,
            "baseurl": site_config.baseurl,
            "locale": site_config.locale,
            "plugins": list(site_config.plugins),
        },
        "pages": [_page_record(page) for page in result.pages],
        "tags": {
            tag: [page.slug for page in pages]
            for tag, pages in result.tag_index.items()
        },
        "pagination": [
            {
                "number": window.number,
                "path": window.path,
                "total_pages": window.total_pages,
                "previous_path": window.previous_path,
                "next_path": window.next_path,
                "pages": [page.slug for page in window.pages],
            }
            for window in result.pagination
        ],
        "skipped": [
            {"path": error.path, "reason": error.reason} for error in result.errors
        ],
    }


def write_manifest(path: Path, result: BuildResult, site_config: SiteConfig) -> Path:
    """Encode the manifest as JSON at ``path`` and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = msgspec_json.encode(build_manifest(result, site_config))
    path.write_bytes(msgspec_json.format(payload, indent=2) + b"\n")
    return path


def _page_record(page: Page) -> dict[str, typ.Any]:
    return {
        "slug": page.slug,
        "title": page.title,
        "date": page.date,
        "url": page.url,
        "tags": list(page.tags),
        "categories": list(page.categories),
        "excerpt": page.excerpt,
        "header_image": page.header_image,
        "layout": page.layout,
        "word_count": page.word_count,
        "read_time": page.read_time,
        "source_path": page.source_path,
        "data": _plain(page.data),
    }


def _plain(value: typ.Any) -> typ.Any:  # noqa: ANN401
    """Convert read-only mappings and tuples into JSON-friendly containers."""
    if isinstance(value, cabc.Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


__all__ = ["build_manifest", "write_manifest"]
