"""Load and validate the blog's site configuration.

This subpackage parses the ``_config.yml`` settings document into an
immutable :class:`SiteConfig`: site identity, pagination settings, author and
social profiles, the plugin list, and the ordered :class:`DefaultRule` set
that supplies fallback front matter to posts. The primary entry points are
:func:`load_site_config` and :func:`parse_site_config`, which check the
required ``title``, apply documented fallbacks, and keep unknown keys for the
rendering engine.

Examples
--------
>>> from blog_pages.config import parse_site_config
>>> site = parse_site_config("title: Example\\npaginate: 5\\n")
>>> site.title, site.paginate
('Example', 5)
"""

from .loader import INTERPRETED_KEYS, load_site_config, parse_site_config
from .models import (
    AuthorProfile,
    ConfigError,
    DefaultRule,
    DefaultScope,
    SiteConfig,
    SocialLink,
)

__all__ = [
    "INTERPRETED_KEYS",
    "AuthorProfile",
    "ConfigError",
    "DefaultRule",
    "DefaultScope",
    "SiteConfig",
    "SocialLink",
    "load_site_config",
    "parse_site_config",
]
