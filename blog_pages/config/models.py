"""Typed dataclasses describing the blog's site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import fnmatch
import typing as typ
from types import MappingProxyType

from blog_pages._constants import (
    DEFAULT_EXCERPT_SEPARATOR,
    DEFAULT_LOCALE,
    DEFAULT_PAGINATE,
    DEFAULT_PAGINATE_PATH,
    DEFAULT_PERMALINK,
    DEFAULT_WORDS_PER_MINUTE,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _empty_mapping() -> cabc.Mapping[str, typ.Any]:
    return MappingProxyType({})


class ConfigError(ValueError):
    """Raised when the site configuration is malformed or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """A profile or footer link rendered by the theme."""

    url: str
    label: str | None = None
    icon: str | None = None


@dc.dataclass(frozen=True, slots=True)
class AuthorProfile:
    """Author sidebar metadata consumed verbatim by the renderer."""

    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    location: str | None = None
    links: tuple[SocialLink, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class DefaultScope:
    """Describe which documents a default rule applies to.

    Attributes
    ----------
    path : str
        Source-relative path prefix (component-wise) or glob; ``""`` matches
        every document.
    type : str or None
        Collection type such as ``"posts"``; ``None`` matches every type.
    """

    path: str = ""
    type: str | None = None

    @property
    def specificity(self) -> tuple[int, int]:
        """Return ``(path components, has type)`` used to order rules."""
        components = [part for part in self.path.strip("/").split("/") if part]
        return len(components), int(self.type is not None)

    def matches(self, relative_path: str, doc_type: str) -> bool:
        """Return whether the scope covers a document path and type."""
        if self.type is not None and self.type != doc_type:
            return False
        scope_path = self.path.strip("/")
        if not scope_path:
            return True
        candidate = relative_path.strip("/")
        if "*" in scope_path or "?" in scope_path:
            return fnmatch.fnmatchcase(candidate, scope_path) or fnmatch.fnmatchcase(
                candidate, f"{scope_path}/*"
            )
        return candidate == scope_path or candidate.startswith(f"{scope_path}/")


@dc.dataclass(frozen=True, slots=True)
class DefaultRule:
    """Fallback front-matter values for documents matching ``scope``."""

    scope: DefaultScope
    values: cabc.Mapping[str, typ.Any]
    index: int = 0

    @property
    def precedence(self) -> tuple[int, int, int]:
        """Sort key: more specific scopes, then later declarations, apply last."""
        path_rank, type_rank = self.scope.specificity
        return path_rank, type_rank, self.index


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Immutable site settings shared by every step of one build.

    Keys the loader does not interpret are preserved in ``extras`` so they can
    be handed to the rendering engine untouched.
    """

    title: str
    subtitle: str | None = None
    description: str | None = None
    name: str | None = None
    url: str = ""
    baseurl: str = ""
    locale: str = DEFAULT_LOCALE
    timezone: str | None = None
    paginate: int = DEFAULT_PAGINATE
    paginate_path: str = DEFAULT_PAGINATE_PATH
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    excerpt_separator: str = DEFAULT_EXCERPT_SEPARATOR
    permalink: str = DEFAULT_PERMALINK
    future: bool = False
    plugins: tuple[str, ...] = ()
    social_links: tuple[SocialLink, ...] = ()
    footer_links: tuple[SocialLink, ...] = ()
    author: AuthorProfile | None = None
    defaults: tuple[DefaultRule, ...] = ()
    extras: cabc.Mapping[str, typ.Any] = dc.field(default_factory=_empty_mapping)

    def get(self, key: str, default: typ.Any = None) -> typ.Any:  # noqa: ANN401
        """Return an uninterpreted top-level setting, or ``default``."""
        return self.extras.get(key, default)


__all__ = [
    "AuthorProfile",
    "ConfigError",
    "DefaultRule",
    "DefaultScope",
    "SiteConfig",
    "SocialLink",
]
