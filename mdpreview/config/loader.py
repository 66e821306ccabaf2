"""Load viewer configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import COLOR_MODES, ViewerConfig, ViewerConfigError


def _color_mode(value: object) -> str:
    """Return a validated colour mode."""
    mode = str(value).strip().lower()
    if mode not in COLOR_MODES:
        msg = f"color_mode must be one of {', '.join(COLOR_MODES)}; got '{value}'."
        raise ViewerConfigError(msg)
    return mode


def _positive_int(key: str, value: object) -> int:
    """Return ``value`` as a positive integer or raise ``ViewerConfigError``."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"{key} must be a positive integer; got '{value}'."
        raise ViewerConfigError(msg)
    return value


def _extensions(value: object) -> tuple[str, ...]:
    """Normalize an extension list, dropping leading dots and blanks."""
    if isinstance(value, str):
        value = value.split()
    if not isinstance(value, list):
        msg = "extensions must be a list of file extensions."
        raise ViewerConfigError(msg)
    normalized = tuple(
        text for text in (str(item).strip().lstrip(".").lower() for item in value) if text
    )
    if not normalized:
        msg = "extensions must name at least one file extension."
        raise ViewerConfigError(msg)
    return normalized


def load_viewer_config(path: Path | None = None) -> ViewerConfig:
    """Load the YAML file describing viewer preferences.

    Parameters
    ----------
    path : Path, optional
        Filesystem path to the YAML configuration. When ``None`` the built-in
        defaults are returned.

    Returns
    -------
    ViewerConfig
        Parsed configuration with defaults applied for missing keys.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ViewerConfigError
        If a value is present but invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> load_viewer_config().is_dark
    False
    >>> load_viewer_config(Path("mdpreview.yaml"))  # doctest: +SKIP
    ViewerConfig(color_mode='dark', ...)
    """
    if path is None:
        return ViewerConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = ViewerConfig()
    return ViewerConfig(
        color_mode=_color_mode(raw.get("color_mode", base.color_mode)),
        max_file_size_mb=_positive_int(
            "max_file_size_mb", raw.get("max_file_size_mb", base.max_file_size_mb)
        ),
        extensions=_extensions(raw.get("extensions", list(base.extensions))),
        title_suffix=str(raw.get("title_suffix", base.title_suffix)),
        output_dir=Path(raw.get("output_dir", base.output_dir)),
    )


__all__ = ["load_viewer_config"]
