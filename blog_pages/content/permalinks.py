"""Slug and permalink helpers for blog posts."""

from __future__ import annotations

import re
import typing as typ

from blog_pages._constants import PERMALINK_STYLES

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from blog_pages.config import SiteConfig

PLACEHOLDER_PATTERN = re.compile(r":([a-z_]+)")
_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated, URL-safe form of ``text``."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug


def post_slug(date: dt.date, title_slug: str) -> str:
    """Return the unique post identifier ``YYYY-MM-DD-title``."""
    return f"{date:%Y-%m-%d}-{title_slug}"


def build_permalink(
    site_config: SiteConfig,
    *,
    date: dt.datetime,
    title_slug: str,
    categories: cabc.Sequence[str] = (),
    output_ext: str = ".html",
) -> str:
    """Expand the configured permalink style or template for one post.

    Unknown placeholders are left untouched; the site ``baseurl`` is
    prefixed and duplicate slashes are collapsed.
    """
    template = PERMALINK_STYLES.get(site_config.permalink, site_config.permalink)
    values = {
        "year": f"{date:%Y}",
        "month": f"{date:%m}",
        "day": f"{date:%d}",
        "i_month": str(date.month),
        "i_day": str(date.day),
        "short_year": f"{date:%y}",
        "y_day": f"{date:%j}",
        "title": title_slug,
        "slug": title_slug,
        "categories": "/".join(slugify(category) for category in categories),
        "output_ext": output_ext,
    }

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    path = PLACEHOLDER_PATTERN.sub(_replace, template)
    if not path.startswith("/"):
        path = f"/{path}"
    return _DUPLICATE_SLASHES.sub("/", f"{site_config.baseurl}{path}")


__all__ = ["build_permalink", "post_slug", "slugify"]
