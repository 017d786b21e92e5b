"""Derive the tag index and pagination windows from sorted pages.

Both functions are pure: they depend only on the page sequence and the site
configuration and are recomputed on every build.
"""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

from blog_pages._constants import PAGE_NUMBER_PLACEHOLDER

from .models import BuildError, Page, PaginationSlice, TagIndex

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from blog_pages.config import SiteConfig


def build_tag_index(pages: cabc.Sequence[Page]) -> TagIndex:
    """Map each tag to the pages carrying it, preserving page order.

    Tags are ordered case-insensitively by name (exact spelling breaks
    ties).
    """
    grouped: dict[str, list[Page]] = {}
    for page in pages:
        for tag in page.tags:
            grouped.setdefault(tag, []).append(page)
    ordered = sorted(grouped, key=lambda tag: (tag.casefold(), tag))
    return MappingProxyType({tag: tuple(grouped[tag]) for tag in ordered})


def pagination_path(site_config: SiteConfig, number: int) -> str:
    """Return the URL path of pagination page ``number`` (1-based)."""
    if number == 1:
        return f"{site_config.baseurl}/"
    path = site_config.paginate_path.replace(PAGE_NUMBER_PLACEHOLDER, str(number))
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{site_config.baseurl}{path}"


def paginate(
    pages: cabc.Sequence[Page], site_config: SiteConfig
) -> tuple[PaginationSlice, ...]:
    """Split ``pages`` into windows of ``site_config.paginate`` entries.

    Every window except the last holds exactly ``paginate`` pages. An empty
    page sequence yields no windows.

    Raises
    ------
    BuildError
        If the configured page size is not positive.
    """
    per_page = site_config.paginate
    if per_page <= 0:
        msg = f"Pagination size must be positive, got {per_page}."
        raise BuildError(msg)

    total = -(-len(pages) // per_page)
    slices: list[PaginationSlice] = []
    for number in range(1, total + 1):
        start = (number - 1) * per_page
        previous_number = number - 1 if number > 1 else None
        next_number = number + 1 if number < total else None
        slices.append(
            PaginationSlice(
                number=number,
                pages=tuple(pages[start : start + per_page]),
                total_pages=total,
                per_page=per_page,
                path=pagination_path(site_config, number),
                previous_number=previous_number,
                next_number=next_number,
                previous_path=(
                    pagination_path(site_config, previous_number)
                    if previous_number
                    else None
                ),
                next_path=(
                    pagination_path(site_config, next_number) if next_number else None
                ),
            )
        )
    return tuple(slices)


__all__ = ["build_tag_index", "paginate", "pagination_path"]
