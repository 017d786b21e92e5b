"""Build the ordered post collection consumed by the rendering engine.

This module turns post files into immutable :class:`Page` records. Each file's
front matter is merged over the matching default rules from the site
configuration, validated, and enriched with derived fields (slug, permalink,
reading statistics). :func:`build_collection` runs the whole batch: malformed
files are skipped and recorded, the surviving pages are sorted newest first,
and the tag index and pagination windows are derived from that order.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> from blog_pages.content import build_collection, discover_posts
>>> site = load_site_config(Path("_config.yml"))  # doctest: +SKIP
>>> result = build_collection(discover_posts(Path(".")), site)  # doctest: +SKIP
>>> pages, tag_index, pagination = result  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath

from blog_pages._constants import MARKDOWN_EXTENSIONS, POSTS_DIR, POSTS_TYPE
from blog_pages.config.helpers import _freeze, _optional_str

from .defaults import deep_merge, resolve_defaults
from .derived import build_tag_index, paginate
from .front_matter import (
    PostFilename,
    parse_post_filename,
    parse_timestamp,
    split_front_matter,
)
from .models import BuildError, BuildResult, DocumentError, Page
from .permalinks import build_permalink, post_slug, slugify
from .text import count_words, read_time

if typ.TYPE_CHECKING:
    from blog_pages.config import SiteConfig

logger = logging.getLogger(__name__)

_HEADER_IMAGE_KEYS = ("image", "overlay_image", "teaser")


def discover_posts(source_root: Path, *, posts_dir: str = POSTS_DIR) -> list[Path]:
    """Return the Markdown post files under ``source_root/posts_dir``.

    The list is sorted by relative path, which is the discovery order used to
    break ties between posts published at the same instant.
    """
    root = source_root / posts_dir
    if not root.is_dir():
        return []
    found = [
        path
        for path in root.rglob("*")
        if path.is_file() and path.suffix.lower() in MARKDOWN_EXTENSIONS
    ]
    return sorted(found, key=lambda path: path.relative_to(root).as_posix())


def build_page(
    path: Path,
    site_config: SiteConfig,
    *,
    relative_path: str | None = None,
    doc_type: str = POSTS_TYPE,
) -> Page:
    """Read one post file and return its effective :class:`Page`.

    Parameters
    ----------
    path : Path
        Location of the post file on disk.
    site_config : SiteConfig
        Configuration supplying default rules, timezone, and permalinks.
    relative_path : str, optional
        Source-relative path used for scope matching; defaults to
        ``_posts/<filename>``.
    doc_type : str, optional
        Collection type used for scope matching (``"posts"``).

    Raises
    ------
    DocumentError
        If the file cannot be read or its front matter is missing,
        malformed, or lacks a usable title or date.
    """
    relative = relative_path or f"{POSTS_DIR}/{path.name}"
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(relative, f"unreadable file: {exc}") from exc
    front_matter, body = split_front_matter(text, source=relative)
    return page_from_parts(
        front_matter, body, site_config, relative_path=relative, doc_type=doc_type
    )


def page_from_parts(
    front_matter: cabc.Mapping[str, typ.Any],
    body: str,
    site_config: SiteConfig,
    *,
    relative_path: str,
    doc_type: str = POSTS_TYPE,
) -> Page:
    """Merge defaults into parsed front matter and derive the Page fields."""
    title = _require_title(front_matter, relative_path)
    merged = deep_merge(
        resolve_defaults(site_config.defaults, relative_path, doc_type), front_matter
    )
    try:
        data = _freeze(merged)
    except TypeError as exc:
        raise DocumentError(relative_path, f"unsupported front matter: {exc}") from exc

    name = PurePosixPath(relative_path).name
    filename = parse_post_filename(name)
    date = _resolve_date(merged.get("date"), filename, site_config, relative_path)

    declared_slug = _optional_str(front_matter.get("slug"))
    if declared_slug:
        title_slug = slugify(declared_slug)
    elif filename is not None:
        title_slug = slugify(filename.title)
    else:
        title_slug = slugify(PurePosixPath(name).stem)
    if not title_slug:
        raise DocumentError(relative_path, "cannot derive a slug from the filename")

    categories_raw = merged.get("categories", merged.get("category"))
    categories = _string_sequence(categories_raw, key="categories", source=relative_path)
    words = count_words(body)
    slug_date = filename.date if filename is not None else date.date()
    return Page(
        slug=post_slug(slug_date, title_slug),
        title=title,
        date=date,
        tags=_string_sequence(merged.get("tags"), key="tags", source=relative_path),
        categories=categories,
        excerpt=_resolve_excerpt(merged.get("excerpt"), body, site_config),
        header_image=_resolve_header_image(merged.get("header")),
        layout=_optional_str(merged.get("layout")),
        body=body,
        word_count=words,
        read_time=read_time(words, site_config.words_per_minute),
        url=build_permalink(
            site_config, date=date, title_slug=title_slug, categories=categories
        ),
        source_path=relative_path,
        data=data,
    )


def build_collection(
    files: cabc.Iterable[Path],
    site_config: SiteConfig,
    *,
    source_root: Path | None = None,
    doc_type: str = POSTS_TYPE,
    max_workers: int = 1,
    now: dt.datetime | None = None,
) -> BuildResult:
    """Build pages, tag index, and pagination windows for ``files``.

    Parameters
    ----------
    files : Iterable[Path]
        Post files in discovery order.
    site_config : SiteConfig
        Immutable configuration for this build.
    source_root : Path, optional
        Site root used to compute source-relative paths for scope matching.
    doc_type : str, optional
        Collection type of every file (``"posts"``).
    max_workers : int, optional
        Parse files on a thread pool when greater than one. Output order
        does not depend on this value.
    now : datetime, optional
        Reference instant for excluding future-dated posts; defaults to the
        current UTC time.

    Returns
    -------
    BuildResult
        Pages sorted newest first, the tag index, the pagination windows, and
        the per-file errors that were skipped.

    Raises
    ------
    BuildError
        If two posts resolve to the same slug or the pagination size is not
        positive.
    """
    if site_config.paginate <= 0:
        msg = f"Pagination size must be positive, got {site_config.paginate}."
        raise BuildError(msg)
    reference = now or dt.datetime.now(dt.UTC)
    paths = list(files)
    jobs = [(path, _relative_path(path, source_root)) for path in paths]

    def _parse(job: tuple[Path, str]) -> Page | DocumentError:
        path, relative = job
        try:
            return build_page(
                path, site_config, relative_path=relative, doc_type=doc_type
            )
        except DocumentError as exc:
            return exc

    if max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(_parse, jobs))
    else:
        outcomes = [_parse(job) for job in jobs]

    pages: list[Page] = []
    errors: list[DocumentError] = []
    for outcome in outcomes:
        if isinstance(outcome, DocumentError):
            logger.warning("Skipping %s: %s", outcome.path, outcome.reason)
            errors.append(outcome)
        elif _is_excluded(outcome, site_config, reference):
            continue
        else:
            pages.append(outcome)

    _ensure_unique_slugs(pages)
    pages.sort(key=lambda page: page.date, reverse=True)
    ordered = tuple(pages)
    logger.info(
        "Built %d pages (%d skipped) for %s", len(ordered), len(errors), site_config.title
    )
    return BuildResult(
        pages=ordered,
        tag_index=build_tag_index(ordered),
        pagination=paginate(ordered, site_config),
        errors=tuple(errors),
    )


def _relative_path(path: Path, source_root: Path | None) -> str:
    """Return the site-relative posix path used for scope matching."""
    if source_root is not None:
        try:
            return path.relative_to(source_root).as_posix()
        except ValueError:
            pass
    parts = path.parts
    if POSTS_DIR in parts[:-1]:
        start = len(parts) - 1 - parts[::-1].index(POSTS_DIR)
        return PurePosixPath(*parts[start:]).as_posix()
    return f"{POSTS_DIR}/{path.name}"


def _is_excluded(page: Page, site_config: SiteConfig, now: dt.datetime) -> bool:
    """Return True for unpublished posts and, unless enabled, future posts."""
    if page.data.get("published") is False:
        logger.info("Excluding unpublished post %s", page.source_path)
        return True
    if not site_config.future and page.date > now:
        logger.info("Excluding future-dated post %s", page.source_path)
        return True
    return False


def _ensure_unique_slugs(pages: cabc.Sequence[Page]) -> None:
    seen: dict[str, str] = {}
    for page in pages:
        previous = seen.get(page.slug)
        if previous is None:
            seen[page.slug] = page.source_path
        else:
            msg = (
                f"Duplicate slug '{page.slug}' produced by "
                f"'{previous}' and '{page.source_path}'."
            )
            raise BuildError(msg)


def _require_title(front_matter: cabc.Mapping[str, typ.Any], source: str) -> str:
    raw = front_matter.get("title")
    if isinstance(raw, bool) or not isinstance(raw, str | int | float):
        raise DocumentError(source, "front matter must define a 'title'")
    title = str(raw).strip()
    if not title:
        raise DocumentError(source, "front matter 'title' is empty")
    return title


def _resolve_date(
    raw: object,
    filename: PostFilename | None,
    site_config: SiteConfig,
    source: str,
) -> dt.datetime:
    if raw is not None:
        if not isinstance(raw, dt.date | str):
            raise DocumentError(source, f"invalid date {raw!r}")
        try:
            return parse_timestamp(raw, timezone=site_config.timezone)
        except ValueError as exc:
            raise DocumentError(source, f"invalid date: {exc}") from exc
    if filename is not None:
        return parse_timestamp(filename.date, timezone=site_config.timezone)
    raise DocumentError(source, "no date in the filename or front matter")


def _string_sequence(value: object, *, key: str, source: str) -> tuple[str, ...]:
    """Normalise a string or list of scalars into unique strings."""
    match value:
        case None:
            return ()
        case str():
            items: list[object] = list(value.split())
        case list() | tuple():
            items = list(value)
        case _:
            raise DocumentError(source, f"'{key}' must be a string or a list")
    seen: dict[str, None] = {}
    for item in items:
        if isinstance(item, bool) or not isinstance(item, str | int | float):
            raise DocumentError(source, f"'{key}' entries must be scalars, got {item!r}")
        text = str(item).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def _resolve_excerpt(raw: object, body: str, site_config: SiteConfig) -> str | None:
    declared = _optional_str(raw)
    if declared is not None:
        return declared
    head, _separator, _rest = body.strip().partition(site_config.excerpt_separator)
    return head.strip() or None


def _resolve_header_image(header: object) -> str | None:
    match header:
        case str():
            return _optional_str(header)
        case cabc.Mapping():
            for key in _HEADER_IMAGE_KEYS:
                image = _optional_str(header.get(key))
                if image:
                    return image
    return None


__all__ = ["build_collection", "build_page", "discover_posts", "page_from_parts"]
