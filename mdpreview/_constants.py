"""Common literal values used across mdpreview.

These constants keep class names, schemes, and size limits centralized so the
renderer, the document helpers, and tests import the same values without
drifting. Intended for internal use within the mdpreview package.

Examples
--------
>>> from mdpreview import _constants
>>> _constants.MAX_FILE_SIZE_BYTES == _constants.MAX_FILE_SIZE_MB * 1024 * 1024
True
>>> _constants.EXTERNAL_LINK_ATTR
'data-external'
"""

VALID_MD_EXTENSIONS = ("md", "markdown", "mdown", "mkd")

MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

EXTERNAL_LINK_ATTR = "data-external"
ASSET_SCHEME = "asset"
HIGHLIGHT_CONTAINER_CLASS = "highlight-container"

LIGHT_STYLE = "default"
DARK_STYLE = "github-dark"
