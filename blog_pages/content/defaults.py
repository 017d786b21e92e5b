"""Apply configured default rules to a document's front matter.

Rules are applied in ascending precedence: fewer path components before
more, untyped before typed, then declaration order. Later applications
override earlier ones, so the most specific rule wins and equally specific
rules resolve in favour of the one declared last. Literal front matter is
overlaid on the result and always wins. Nested mappings merge key by key.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

if typ.TYPE_CHECKING:
    from blog_pages.config import DefaultRule


def matching_rules(
    rules: cabc.Iterable[DefaultRule], relative_path: str, doc_type: str
) -> list[DefaultRule]:
    """Return the rules covering the document, in application order."""
    matched = [rule for rule in rules if rule.scope.matches(relative_path, doc_type)]
    return sorted(matched, key=lambda rule: rule.precedence)


def resolve_defaults(
    rules: cabc.Iterable[DefaultRule], relative_path: str, doc_type: str
) -> dict[str, typ.Any]:
    """Merge the values of every matching rule into one mapping."""
    merged: dict[str, typ.Any] = {}
    for rule in matching_rules(rules, relative_path, doc_type):
        merged = deep_merge(merged, rule.values)
    return merged


def deep_merge(
    base: cabc.Mapping[str, typ.Any], overlay: cabc.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Return ``base`` updated with ``overlay``; ``overlay`` wins on conflict."""
    merged = {key: _thaw(value) for key, value in base.items()}
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, cabc.Mapping) and isinstance(value, cabc.Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _thaw(value)
    return merged


def _thaw(value: typ.Any) -> typ.Any:  # noqa: ANN401
    """Return a mutable copy of read-only mappings and tuples."""
    if isinstance(value, cabc.Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


__all__ = ["deep_merge", "matching_rules", "resolve_defaults"]
