"""Shared dataclasses and errors used by the content collection builder."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class DocumentError(ValueError):
    """Raised when a single content file cannot be turned into a Page.

    The builder records these per file and carries on with the batch.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class BuildError(RuntimeError):
    """Raised when the collection as a whole cannot be built consistently."""


@dc.dataclass(frozen=True, slots=True)
class Page:
    """One blog post with its effective front matter applied.

    Attributes
    ----------
    slug : str
        Unique identifier of the form ``YYYY-MM-DD-title``.
    title : str
        Post title taken from the literal front matter.
    date : datetime.datetime
        Timezone-aware publish timestamp.
    tags : tuple[str, ...]
        De-duplicated tags in declaration order.
    categories : tuple[str, ...]
        De-duplicated categories in declaration order.
    excerpt : str or None
        Declared excerpt, or the body text before the excerpt separator.
    header_image : str or None
        Header image reference resolved from the ``header`` block.
    layout : str or None
        Effective layout name.
    body : str
        Raw Markdown body.
    word_count : int
        Words in the rendered text of the body.
    read_time : int
        Whole minutes at the configured reading speed; ``0`` means under a
        minute.
    url : str
        Permalink including the site ``baseurl``.
    source_path : str
        Path of the source file relative to the site root.
    data : Mapping[str, Any]
        Read-only effective front matter (defaults overlaid by the file's own
        values).
    """

    slug: str
    title: str
    date: dt.datetime
    tags: tuple[str, ...]
    categories: tuple[str, ...]
    excerpt: str | None
    header_image: str | None
    layout: str | None
    body: str
    word_count: int
    read_time: int
    url: str
    source_path: str
    data: cabc.Mapping[str, typ.Any]


TagIndex = cabc.Mapping[str, tuple[Page, ...]]


@dc.dataclass(frozen=True, slots=True)
class PaginationSlice:
    """One fixed-size window over the chronologically sorted pages."""

    number: int
    pages: tuple[Page, ...]
    total_pages: int
    per_page: int
    path: str
    previous_number: int | None = None
    next_number: int | None = None
    previous_path: str | None = None
    next_path: str | None = None


@dc.dataclass(frozen=True, slots=True)
class BuildResult:
    """Derived collections emitted by one build.

    Iterating yields ``(pages, tag_index, pagination)`` so callers can unpack
    the result directly; skipped files are available on ``errors``.
    """

    pages: tuple[Page, ...]
    tag_index: TagIndex
    pagination: tuple[PaginationSlice, ...]
    errors: tuple[DocumentError, ...] = ()

    def __iter__(self) -> cabc.Iterator[typ.Any]:
        """Yield the three derived collections in contract order."""
        yield self.pages
        yield self.tag_index
        yield self.pagination


__all__ = [
    "BuildError",
    "BuildResult",
    "DocumentError",
    "Page",
    "PaginationSlice",
    "TagIndex",
]
