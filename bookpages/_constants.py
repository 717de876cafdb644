"""Common literal values used across bookpages.

These constants keep output filenames and the markers recognised inside
rendered code blocks centralized so the generator, the post-processing
pipeline, and tests import the same values without drifting. Intended for
internal use within the bookpages package.

Examples
--------
>>> from bookpages import _constants
>>> _constants.SEARCH_INDEX_FILENAME
'searchindex.json'
>>> _constants.BREADCRUMB_SEPARATOR.join(["Guide", "Install"])
'Guide » Install'
"""

SEARCH_INDEX_FILENAME = "searchindex.json"
PRINT_FILENAME = "print.html"
PRINT_SOURCE = "print.md"
INDEX_FILENAME = "index.html"
PAGE_TEMPLATE = "book_page.jinja"

BREADCRUMB_SEPARATOR = " » "

RUNNABLE_LANGUAGE_CLASS = "language-rust"
RUNNABLE_CLASS = "bookpages-runnable"
IGNORE_CLASS = "ignore"
EDITABLE_CLASS = "editable"
ENTRY_POINT_MARKERS = ("fn main", "quick_main!")
ATTRIBUTE_PREFIX = "#!["
