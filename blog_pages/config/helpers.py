"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ
from types import MappingProxyType

from .models import AuthorProfile, ConfigError, DefaultRule, DefaultScope, SocialLink


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _strip_trailing_slash(value: object | None) -> str:
    """Return a URL fragment without trailing slashes; empty when unset."""
    text = _optional_str(value) or ""
    return text.rstrip("/")


def _freeze(value: typ.Any) -> typ.Any:  # noqa: ANN401
    """Return a read-only copy of a YAML value.

    Sequences become tuples and mappings become ``MappingProxyType`` views.
    Anything outside strings, numbers, booleans, dates, sequences and
    string-keyed mappings raises ``TypeError``.
    """
    match value:
        case None:
            return None
        case str() | bool() | int() | float() | dt.date():
            return value
        case cabc.Mapping():
            frozen: dict[str, typ.Any] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    msg = f"mapping keys must be strings, got {key!r}"
                    raise TypeError(msg)
                frozen[key] = _freeze(item)
            return MappingProxyType(frozen)
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case _:
            msg = f"unsupported value of type {type(value).__name__}"
            raise TypeError(msg)


def _string_list(value: object, *, key: str) -> tuple[str, ...]:
    """Return an ordered, de-duplicated tuple of strings for ``key``."""
    if value is None:
        return ()
    if not isinstance(value, list):
        msg = f"'{key}' must be a list of strings."
        raise ConfigError(msg)
    seen: dict[str, None] = {}
    for entry in value:
        if not isinstance(entry, str) or not entry.strip():
            msg = f"'{key}' entries must be non-empty strings, got {entry!r}."
            raise ConfigError(msg)
        seen.setdefault(entry.strip(), None)
    return tuple(seen)


def _build_links(payload: object, *, key: str) -> tuple[SocialLink, ...]:
    """Build link records from a ``{links: [...]}`` block or a bare list."""
    if payload is None:
        return ()
    raw_links = payload.get("links") if isinstance(payload, dict) else payload
    if raw_links is None:
        return ()
    if not isinstance(raw_links, list):
        msg = f"'{key}' links must be a list."
        raise ConfigError(msg)
    links: list[SocialLink] = []
    for entry in raw_links:
        match entry:
            case str() as url if url.strip():
                links.append(SocialLink(url=url.strip()))
            case {"url": url, **rest} if _optional_str(url):
                links.append(
                    SocialLink(
                        url=str(url).strip(),
                        label=_optional_str(rest.get("label")),
                        icon=_optional_str(rest.get("icon")),
                    )
                )
            case _:
                msg = f"'{key}' link entries need a url, got {entry!r}."
                raise ConfigError(msg)
    return tuple(links)


def _build_author(payload: object) -> AuthorProfile | None:
    """Build the author profile, or None when the block is absent."""
    if payload is None:
        return None
    if not isinstance(payload, dict):
        msg = "'author' must be a mapping."
        raise ConfigError(msg)
    return AuthorProfile(
        name=_optional_str(payload.get("name")),
        bio=_optional_str(payload.get("bio")),
        avatar=_optional_str(payload.get("avatar")),
        location=_optional_str(payload.get("location")),
        links=_build_links(payload.get("links"), key="author"),
    )


def _build_default_rules(payload: object) -> tuple[DefaultRule, ...]:
    """Build ordered default rules from the ``defaults`` sequence."""
    if payload is None:
        return ()
    if not isinstance(payload, list):
        msg = "'defaults' must be a list of {scope, values} entries."
        raise ConfigError(msg)
    rules: list[DefaultRule] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            msg = f"defaults[{index}] must be a mapping."
            raise ConfigError(msg)
        values = entry.get("values")
        if not isinstance(values, dict):
            msg = f"defaults[{index}] is missing a 'values' mapping."
            raise ConfigError(msg)
        scope_raw = entry.get("scope") or {}
        if not isinstance(scope_raw, dict):
            msg = f"defaults[{index}].scope must be a mapping."
            raise ConfigError(msg)
        try:
            frozen_values = _freeze(values)
        except TypeError as exc:
            msg = f"defaults[{index}].values: {exc}"
            raise ConfigError(msg) from exc
        rules.append(
            DefaultRule(
                scope=DefaultScope(
                    path=str(scope_raw.get("path") or ""),
                    type=_optional_str(scope_raw.get("type")),
                ),
                values=frozen_values,
                index=index,
            )
        )
    return tuple(rules)


def _coerce_int(value: object, *, key: str, default: int) -> int:
    """Return ``value`` as an int, falling back to ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | str):
        msg = f"'{key}' must be an integer, got {value!r}."
        raise ConfigError(msg)
    try:
        return int(value)
    except ValueError as exc:
        msg = f"'{key}' must be an integer, got {value!r}."
        raise ConfigError(msg) from exc


def _coerce_bool(value: object, *, key: str, default: bool) -> bool:
    """Return ``value`` when it is a YAML boolean, ``default`` when unset."""
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise ConfigError(msg)
    return value


__all__ = [
    "_build_author",
    "_build_default_rules",
    "_build_links",
    "_coerce_bool",
    "_coerce_int",
    "_freeze",
    "_optional_str",
    "_strip_trailing_slash",
    "_string_list",
]
