"""Discover, parse, and order the blog's posts for the rendering engine."""

from .builder import build_collection, build_page, discover_posts, page_from_parts
from .defaults import matching_rules, resolve_defaults
from .derived import build_tag_index, paginate, pagination_path
from .front_matter import parse_post_filename, parse_timestamp, split_front_matter
from .models import (
    BuildError,
    BuildResult,
    DocumentError,
    Page,
    PaginationSlice,
    TagIndex,
)

__all__ = [
    "BuildError",
    "BuildResult",
    "DocumentError",
    "Page",
    "PaginationSlice",
    "TagIndex",
    "build_collection",
    "build_page",
    "build_tag_index",
    "discover_posts",
    "matching_rules",
    "page_from_parts",
    "paginate",
    "pagination_path",
    "parse_post_filename",
    "parse_timestamp",
    "resolve_defaults",
    "split_front_matter",
]
