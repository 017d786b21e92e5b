r"""Split post files into front matter and body, and parse post filenames.

Front matter is the YAML block between a leading ``---`` line and the next
``---`` (or ``...``) line. Post filenames follow the ``YYYY-MM-DD-title.ext``
convention.

Example
-------
>>> from blog_pages.content.front_matter import split_front_matter
>>> data, body = split_front_matter("---\ntitle: Hello\n---\nBody text\n")
>>> data["title"], body
('Hello', 'Body text\n')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import re
import typing as typ
import zoneinfo

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blog_pages._constants import MARKDOWN_EXTENSIONS

from .models import DocumentError

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
POST_FILENAME_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})-(?P<title>.+)$"
)
_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S.%f %z",
)


@dc.dataclass(frozen=True, slots=True)
class PostFilename:
    """Date and title components encoded in a post filename."""

    date: dt.date
    title: str
    ext: str


def split_front_matter(
    text: str, *, source: str = "<string>"
) -> tuple[dict[str, typ.Any], str]:
    """Return the parsed front matter mapping and the remaining body.

    Raises
    ------
    DocumentError
        If the file has no front matter block, the block is not valid YAML,
        or it does not describe a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        raise DocumentError(source, "missing front matter block")
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group("yaml"))
    except YAMLError as exc:
        raise DocumentError(source, f"malformed front matter: {exc}") from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise DocumentError(source, "front matter must be a mapping")
    return dict(loaded), text[match.end() :]


def parse_post_filename(name: str) -> PostFilename | None:
    """Return the date/title encoded in ``name`` or None when absent."""
    stem, dot, ext = name.rpartition(".")
    if not dot or f".{ext.lower()}" not in MARKDOWN_EXTENSIONS:
        stem, ext = name, ""
    match = POST_FILENAME_PATTERN.match(stem)
    if match is None:
        return None
    try:
        date = dt.date(
            int(match.group("year")), int(match.group("month")), int(match.group("day"))
        )
    except ValueError:
        return None
    return PostFilename(date=date, title=match.group("title"), ext=ext)


def parse_timestamp(
    value: dt.datetime | dt.date | str, *, timezone: str | None = None
) -> dt.datetime:
    """Return a timezone-aware datetime parsed from a front-matter value.

    Naive values are localised to ``timezone`` (UTC when unset).

    Raises
    ------
    ValueError
        If ``value`` is not a recognised timestamp.
    """
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime.combine(value, dt.time())
        case str() as text:
            parsed = _parse_timestamp_text(text.strip())
        case _:
            msg = f"unsupported date value {value!r}"
            raise ValueError(msg)
    if parsed.tzinfo is None:
        zone = zoneinfo.ZoneInfo(timezone) if timezone else dt.UTC
        return parsed.replace(tzinfo=zone)
    return parsed


def _parse_timestamp_text(text: str) -> dt.datetime:
    if not text:
        msg = "empty date"
        raise ValueError(msg)
    sanitized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return dt.datetime.fromisoformat(sanitized)
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt)
        except ValueError:
            continue
    msg = f"unrecognised date {text!r}"
    raise ValueError(msg)


__all__ = [
    "FRONT_MATTER_PATTERN",
    "POST_FILENAME_PATTERN",
    "PostFilename",
    "parse_post_filename",
    "parse_timestamp",
    "split_front_matter",
]
