"""Unit tests for front matter splitting, filename parsing, and timestamps."""

from __future__ import annotations

import datetime as dt

import pytest

from blog_pages.content import (
    DocumentError,
    parse_post_filename,
    parse_timestamp,
    split_front_matter,
)


def test_split_returns_mapping_and_body() -> None:
    """The YAML block is parsed and the remaining text is returned verbatim."""
    data, body = split_front_matter(
        "---\ntitle: Hello\ntags: [a, b]\n---\nFirst line\n\nSecond\n"
    )
    assert data == {"title": "Hello", "tags": ["a", "b"]}, f"got {data!r}"
    assert body == "First line\n\nSecond\n", f"unexpected body {body!r}"


def test_split_accepts_empty_block_and_dot_terminator() -> None:
    """An empty block is an empty mapping; ``...`` also closes the block."""
    assert split_front_matter("---\n---\nBody") == ({}, "Body")
    data, body = split_front_matter("---\ntitle: Dots\n...\nBody\n")
    assert data == {"title": "Dots"}
    assert body == "Body\n"


def test_split_handles_crlf_line_endings() -> None:
    """Windows line endings do not hide the closing delimiter."""
    data, body = split_front_matter("---\r\ntitle: CRLF\r\n---\r\nBody\r\n")
    assert data == {"title": "CRLF"}
    assert body == "Body\r\n"


@pytest.mark.parametrize(
    ("text", "reason"),
    [
        ("No front matter at all\n", "missing front matter"),
        ("---\ntitle: never closed\n", "missing front matter"),
        ("---\ntitle: [broken\n---\nBody\n", "malformed front matter"),
        ("---\n- a\n- b\n---\nBody\n", "must be a mapping"),
    ],
)
def test_split_rejects_invalid_blocks(text: str, reason: str) -> None:
    """Malformed front matter raises DocumentError naming the source."""
    with pytest.raises(DocumentError, match=reason) as excinfo:
        split_front_matter(text, source="_posts/bad.md")
    assert excinfo.value.path == "_posts/bad.md", "error should name the file"


def test_parse_post_filename_extracts_date_and_title() -> None:
    """Dated filenames expose their date, title part, and extension."""
    parsed = parse_post_filename("2021-03-07-writing-a-parser.markdown")
    assert parsed is not None, "expected a dated filename to parse"
    assert parsed.date == dt.date(2021, 3, 7)
    assert parsed.title == "writing-a-parser"
    assert parsed.ext == "markdown"


@pytest.mark.parametrize(
    "name",
    ["about.md", "2021-13-40-impossible-date.md", "2021-03-07.md", "notes.txt"],
)
def test_parse_post_filename_rejects_undated_names(name: str) -> None:
    """Names without a valid ``YYYY-MM-DD-title`` prefix are not post names."""
    assert parse_post_filename(name) is None, f"{name!r} should not parse"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (
            "2020-06-20 09:30:00 +0200",
            dt.datetime(2020, 6, 20, 9, 30, tzinfo=dt.timezone(dt.timedelta(hours=2))),
        ),
        ("2020-06-20T07:30:00Z", dt.datetime(2020, 6, 20, 7, 30, tzinfo=dt.UTC)),
        ("2020-06-20", dt.datetime(2020, 6, 20, tzinfo=dt.UTC)),
        (dt.date(2020, 6, 20), dt.datetime(2020, 6, 20, tzinfo=dt.UTC)),
        (dt.datetime(2020, 6, 20, 12), dt.datetime(2020, 6, 20, 12, tzinfo=dt.UTC)),
    ],
)
def test_parse_timestamp_formats(value: object, expected: dt.datetime) -> None:
    """Jekyll, ISO-8601, and YAML date values resolve to aware datetimes."""
    parsed = parse_timestamp(value)  # type: ignore[arg-type]
    assert parsed == expected, f"expected {expected!r}, got {parsed!r}"
    assert parsed.tzinfo is not None, "timestamps must be timezone-aware"


def test_parse_timestamp_localises_naive_values() -> None:
    """Naive values take the site timezone when one is configured."""
    parsed = parse_timestamp("2020-06-20 10:00:00", timezone="Europe/Madrid")
    assert parsed.utcoffset() == dt.timedelta(hours=2)


@pytest.mark.parametrize("value", ["", "yesterday", "2020-02-30"])
def test_parse_timestamp_rejects_garbage(value: str) -> None:
    """Unparseable dates raise ValueError for the builder to report."""
    with pytest.raises(ValueError, match="date"):
        parse_timestamp(value)
