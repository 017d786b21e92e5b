"""Unit tests for the tag index and pagination windows."""

from __future__ import annotations

import collections.abc as cabc

import pytest

from blog_pages.config import SiteConfig, parse_site_config
from blog_pages.content import (
    BuildError,
    Page,
    build_tag_index,
    page_from_parts,
    paginate,
    pagination_path,
)

TAG_SETS = [
    ["swift", "parsing"],
    [],
    ["Swift", "swiftui"],
    ["swift"],
    ["codable", "parsing", "swift"],
    ["ios"],
    ["swift", "ios"],
]


def _pages(site: SiteConfig, count: int) -> tuple[Page, ...]:
    pages = [
        page_from_parts(
            {"title": f"Post {index}", "tags": TAG_SETS[index % len(TAG_SETS)]},
            f"Body {index}",
            site,
            relative_path=f"_posts/2020-01-{index + 1:02d}-post-{index}.md",
        )
        for index in range(count)
    ]
    return tuple(sorted(pages, key=lambda page: page.date, reverse=True))


@pytest.fixture
def site() -> SiteConfig:
    """Return a configuration paginating by five under a ``/blog`` baseurl."""
    return parse_site_config("title: T\npaginate: 5\nbaseurl: /blog\n")


def test_tag_index_matches_reference_iteration(site: SiteConfig) -> None:
    """The index equals a mapping built by walking each page's tags."""
    pages = _pages(site, 12)
    reference: dict[str, list[Page]] = {}
    for page in pages:
        for tag in page.tags:
            reference.setdefault(tag, []).append(page)

    index = build_tag_index(pages)

    assert {tag: list(items) for tag, items in index.items()} == reference
    assert list(index) == ["codable", "ios", "parsing", "Swift", "swift", "swiftui"], (
        f"tags should be ordered case-insensitively, got {list(index)!r}"
    )


def test_tag_index_is_read_only(site: SiteConfig) -> None:
    """The index cannot be patched after it is built."""
    index = build_tag_index(_pages(site, 3))
    assert isinstance(index, cabc.Mapping), "the index must be a read-only Mapping"
    with pytest.raises(TypeError):
        index["new"] = ()  # type: ignore[index]


@pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 10, 13])
def test_pagination_windows_partition_pages(site: SiteConfig, count: int) -> None:
    """Concatenated windows reproduce the pages; only the last may be short."""
    pages = _pages(site, count)
    windows = paginate(pages, site)

    flattened = tuple(page for window in windows for page in window.pages)
    assert flattened == pages, "windows must neither drop nor duplicate pages"
    for window in windows[:-1]:
        assert len(window.pages) == site.paginate
    if windows:
        assert 0 < len(windows[-1].pages) <= site.paginate
    assert [window.number for window in windows] == list(range(1, len(windows) + 1))
    assert all(window.total_pages == len(windows) for window in windows)


def test_pagination_links(site: SiteConfig) -> None:
    """Window paths follow ``paginate_path`` with page one at the index."""
    windows = paginate(_pages(site, 11), site)

    assert [window.path for window in windows] == [
        "/blog/",
        "/blog/page2/",
        "/blog/page3/",
    ]
    first, middle, last = windows
    assert first.previous_path is None
    assert first.next_path == "/blog/page2/"
    assert middle.previous_number == 1
    assert middle.next_number == 3
    assert last.next_path is None
    assert last.previous_path == "/blog/page2/"


def test_pagination_path_without_leading_slash() -> None:
    """Relative ``paginate_path`` templates are anchored at the site root."""
    site = parse_site_config("title: T\npaginate_path: blog/p:num\n")
    assert pagination_path(site, 1) == "/"
    assert pagination_path(site, 4) == "/blog/p4"


def test_paginate_rejects_non_positive_size() -> None:
    """A page size of zero is a build-level error."""
    site = parse_site_config("title: T\npaginate: -1\n")
    with pytest.raises(BuildError):
        paginate((), site)
