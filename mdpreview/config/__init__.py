"""Load and validate mdpreview viewer configuration.

The configuration is an optional YAML file holding the preferred colour mode,
the maximum document size, the recognised markdown extensions, and preview
page options. :func:`load_viewer_config` applies defaults for anything the
file leaves out and returns a :class:`ViewerConfig`.

Examples
--------
>>> from mdpreview.config import load_viewer_config
>>> load_viewer_config().max_file_size_mb
10
"""

from .loader import load_viewer_config
from .models import COLOR_MODES, ViewerConfig, ViewerConfigError

__all__ = ["COLOR_MODES", "ViewerConfig", "ViewerConfigError", "load_viewer_config"]
