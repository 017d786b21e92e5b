"""Load the blog's ``_config.yml`` into an immutable SiteConfig."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
import zoneinfo

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blog_pages._constants import (
    DEFAULT_EXCERPT_SEPARATOR,
    DEFAULT_LOCALE,
    DEFAULT_PAGINATE,
    DEFAULT_PAGINATE_PATH,
    DEFAULT_PERMALINK,
    DEFAULT_WORDS_PER_MINUTE,
    PAGE_NUMBER_PLACEHOLDER,
)

from .helpers import (
    _build_author,
    _build_default_rules,
    _build_links,
    _coerce_bool,
    _coerce_int,
    _freeze,
    _optional_str,
    _string_list,
    _strip_trailing_slash,
)
from .models import ConfigError, SiteConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

INTERPRETED_KEYS = frozenset(
    {
        "title",
        "subtitle",
        "description",
        "name",
        "url",
        "baseurl",
        "locale",
        "timezone",
        "paginate",
        "paginate_path",
        "words_per_minute",
        "excerpt_separator",
        "permalink",
        "future",
        "plugins",
        "social",
        "author",
        "footer",
        "defaults",
    }
)


def load_site_config(path: Path) -> SiteConfig:
    """Read and parse the site configuration document at ``path``.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (usually ``_config.yml``).

    Returns
    -------
    SiteConfig
        Immutable configuration for the duration of one build.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not a YAML mapping, or lacks a
        ``title``.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_site_config
    >>> site = load_site_config(Path("_config.yml"))  # doctest: +SKIP
    >>> site.paginate  # doctest: +SKIP
    5
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Configuration file '{path}' could not be read: {exc}"
        raise ConfigError(msg) from exc
    return parse_site_config(text)


def parse_site_config(document: str | cabc.Mapping[str, typ.Any]) -> SiteConfig:
    """Parse a configuration document into a :class:`SiteConfig`.

    Only the keys the build interprets are validated; every other top-level
    key is kept verbatim in ``SiteConfig.extras``.

    Parameters
    ----------
    document : str or Mapping
        YAML text, or an already-parsed mapping.

    Returns
    -------
    SiteConfig
        Parsed configuration with documented fallbacks applied.

    Raises
    ------
    ConfigError
        If the document is not a YAML mapping, ``title`` is missing, or an
        interpreted key has the wrong shape.
    """
    raw = _load_mapping(document)

    title = _optional_str(raw.get("title"))
    if title is None:
        msg = "Site configuration must define a non-empty 'title'."
        raise ConfigError(msg)

    paginate_path = str(raw.get("paginate_path") or DEFAULT_PAGINATE_PATH)
    if PAGE_NUMBER_PLACEHOLDER not in paginate_path:
        msg = (
            f"'paginate_path' must contain the '{PAGE_NUMBER_PLACEHOLDER}' "
            f"placeholder, got {paginate_path!r}."
        )
        raise ConfigError(msg)

    words_per_minute = _coerce_int(
        raw.get("words_per_minute"),
        key="words_per_minute",
        default=DEFAULT_WORDS_PER_MINUTE,
    )
    if words_per_minute <= 0:
        msg = f"'words_per_minute' must be positive, got {words_per_minute}."
        raise ConfigError(msg)

    extras_raw = {key: value for key, value in raw.items() if key not in INTERPRETED_KEYS}
    try:
        extras = _freeze(extras_raw)
    except TypeError as exc:
        msg = f"Unsupported configuration value: {exc}"
        raise ConfigError(msg) from exc

    return SiteConfig(
        title=title,
        subtitle=_optional_str(raw.get("subtitle")),
        description=_optional_str(raw.get("description")),
        name=_optional_str(raw.get("name")),
        url=_strip_trailing_slash(raw.get("url")),
        baseurl=_strip_trailing_slash(raw.get("baseurl")),
        locale=_optional_str(raw.get("locale")) or DEFAULT_LOCALE,
        timezone=_validate_timezone(raw.get("timezone")),
        paginate=_coerce_int(
            raw.get("paginate"), key="paginate", default=DEFAULT_PAGINATE
        ),
        paginate_path=paginate_path,
        words_per_minute=words_per_minute,
        excerpt_separator=str(raw.get("excerpt_separator") or DEFAULT_EXCERPT_SEPARATOR),
        permalink=_optional_str(raw.get("permalink")) or DEFAULT_PERMALINK,
        future=_coerce_bool(raw.get("future"), key="future", default=False),
        plugins=_string_list(raw.get("plugins"), key="plugins"),
        social_links=_build_links(raw.get("social"), key="social"),
        footer_links=_build_links(raw.get("footer"), key="footer"),
        author=_build_author(raw.get("author")),
        defaults=_build_default_rules(raw.get("defaults")),
        extras=extras,
    )


def _load_mapping(document: str | cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return the top-level mapping of ``document`` or raise ConfigError."""
    if isinstance(document, cabc.Mapping):
        return dict(document)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(document)
    except YAMLError as exc:
        msg = f"Site configuration is not valid YAML: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    return dict(loaded)


def _validate_timezone(value: object) -> str | None:
    """Return the IANA zone name after checking it resolves."""
    name = _optional_str(value)
    if name is None:
        return None
    try:
        zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown 'timezone' {name!r}."
        raise ConfigError(msg) from exc
    return name


__all__ = ["INTERPRETED_KEYS", "load_site_config", "parse_site_config"]
