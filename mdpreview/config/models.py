"""Typed dataclasses describing mdpreview viewer configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from mdpreview._constants import MAX_FILE_SIZE_MB, VALID_MD_EXTENSIONS

COLOR_MODES = ("light", "dark")


class ViewerConfigError(ValueError):
    """Raised when the viewer configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ViewerConfig:
    """Viewer preferences consumed by the CLI and document helpers.

    Attributes
    ----------
    color_mode : str
        ``"light"`` or ``"dark"``; selects the highlighting style.
    max_file_size_mb : int
        Largest document, in MiB, the viewer agrees to open.
    extensions : tuple[str, ...]
        File extensions (without the dot) treated as markdown.
    title_suffix : str
        Appended to the document name in the preview page title.
    output_dir : Path
        Folder receiving preview pages when no explicit output is given.
    """

    color_mode: str = "light"
    max_file_size_mb: int = MAX_FILE_SIZE_MB
    extensions: tuple[str, ...] = VALID_MD_EXTENSIONS
    title_suffix: str = "Preview"
    output_dir: Path = Path("preview")

    @property
    def is_dark(self) -> bool:
        """Return True when the dark colour mode is selected."""
        return self.color_mode == "dark"

    @property
    def max_file_size_bytes(self) -> int:
        """Return the size limit in bytes."""
        return self.max_file_size_mb * 1024 * 1024


__all__ = ["COLOR_MODES", "ViewerConfig", "ViewerConfigError"]
