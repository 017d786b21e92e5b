"""Common literal values used across blog_pages.

These constants keep fallback settings and filename conventions centralized so
the configuration loader, content builder, and tests can import the same
values without drifting. Intended for internal use within the blog_pages
package.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.DEFAULT_PAGINATE_PATH.replace(_constants.PAGE_NUMBER_PLACEHOLDER, "2")
'/page2/'
>>> ".md" in _constants.MARKDOWN_EXTENSIONS
True
"""

DEFAULT_PAGINATE = 10
DEFAULT_PAGINATE_PATH = "/page:num/"
PAGE_NUMBER_PLACEHOLDER = ":num"
DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_LOCALE = "en-US"
DEFAULT_EXCERPT_SEPARATOR = "\n\n"
DEFAULT_PERMALINK = "date"
POSTS_DIR = "_posts"
POSTS_TYPE = "posts"
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mkd", ".mkdn", ".mdown")
PERMALINK_STYLES: dict[str, str] = {
    "date": "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title:output_ext",
    "none": "/:categories/:title:output_ext",
}
