"""Unit tests for default-rule scope matching and merge precedence."""

from __future__ import annotations

from textwrap import dedent

from blog_pages.config import DefaultScope, SiteConfig, parse_site_config
from blog_pages.content import matching_rules, page_from_parts, resolve_defaults


def _site(defaults_yaml: str) -> SiteConfig:
    return parse_site_config("title: T\n" + dedent(defaults_yaml))


def test_empty_scope_matches_everything() -> None:
    """A blank path with no type covers every document."""
    scope = DefaultScope()
    assert scope.matches("_posts/2020-01-01-a.md", "posts")
    assert scope.matches("about.md", "pages")


def test_path_scope_matches_on_component_boundaries() -> None:
    """Path prefixes match whole components, not partial names."""
    scope = DefaultScope(path="_posts/swift")
    assert scope.matches("_posts/swift/2020-01-01-a.md", "posts")
    assert not scope.matches("_posts/swiftui/2020-01-01-a.md", "posts"), (
        "'swift' must not match the 'swiftui' directory"
    )


def test_glob_scope_and_type_filter() -> None:
    """Glob paths use fnmatch and ``type`` restricts the collection."""
    scope = DefaultScope(path="_posts/*-swift*", type="posts")
    assert scope.matches("_posts/2020-01-01-swift-tips.md", "posts")
    assert not scope.matches("_posts/2020-01-01-swift-tips.md", "drafts")
    assert not scope.matches("_posts/2020-01-01-kotlin.md", "posts")


def test_more_specific_rule_wins_regardless_of_order() -> None:
    """A deeper path beats a broader rule even when declared first."""
    site = _site(
        """
        defaults:
          - scope: {path: _posts/swift, type: posts}
            values: {layout: swift}
          - scope: {path: "", type: posts}
            values: {layout: single, share: true}
        """
    )
    merged = resolve_defaults(site.defaults, "_posts/swift/2020-01-01-a.md", "posts")
    assert merged == {"layout": "swift", "share": True}, f"got {merged!r}"


def test_typed_rule_beats_untyped_rule_at_same_depth() -> None:
    """With equal path depth, a rule naming a type is more specific."""
    site = _site(
        """
        defaults:
          - scope: {path: "", type: posts}
            values: {layout: typed}
          - scope: {path: ""}
            values: {layout: untyped}
        """
    )
    merged = resolve_defaults(site.defaults, "_posts/2020-01-01-a.md", "posts")
    assert merged["layout"] == "typed"


def test_equal_specificity_resolves_to_later_declaration() -> None:
    """Ties are broken by declaration order: the later rule applies last."""
    site = _site(
        """
        defaults:
          - scope: {type: posts}
            values: {layout: first, comments: true}
          - scope: {type: posts}
            values: {layout: second}
        """
    )
    rules = matching_rules(site.defaults, "_posts/2020-01-01-a.md", "posts")
    assert [rule.index for rule in rules] == [0, 1]
    merged = resolve_defaults(site.defaults, "_posts/2020-01-01-a.md", "posts")
    assert merged == {"layout": "second", "comments": True}


def test_nested_mappings_merge_key_by_key() -> None:
    """Front matter overrides nested default keys without discarding siblings."""
    site = _site(
        """
        defaults:
          - scope: {type: posts}
            values:
              layout: single
              header:
                overlay_filter: 0.5
                teaser: /assets/default-teaser.png
        """
    )
    page = page_from_parts(
        {"title": "Nested", "header": {"teaser": "/assets/mine.png"}},
        "Body",
        site,
        relative_path="_posts/2020-01-01-nested.md",
    )
    assert dict(page.data["header"]) == {
        "overlay_filter": 0.5,
        "teaser": "/assets/mine.png",
    }
    assert page.header_image == "/assets/mine.png"


def test_front_matter_wins_over_default_layout() -> None:
    """A post's own ``layout`` overrides the ``layout: single`` default."""
    site = _site(
        """
        defaults:
          - scope: {path: "", type: posts}
            values: {layout: single, read_time: true}
        """
    )
    page = page_from_parts(
        {"title": "Custom", "layout": "custom"},
        "Body",
        site,
        relative_path="_posts/2020-01-01-custom.md",
    )
    assert page.layout == "custom", f"expected front matter to win, got {page.layout!r}"
    assert page.data["read_time"] is True, "non-conflicting defaults still apply"
