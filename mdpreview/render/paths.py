"""Resolve markdown image references against the open document's directory.

Remote ``http(s)`` images pass through untouched. Every other scheme is
blocked, and local references are joined to the document directory,
normalized, and rejected unless they stay inside that directory. Contained
paths are handed to a resource converter (``asset_url`` by default) that maps
them onto the viewer's ``asset:`` protocol. A blocked image keeps an empty
``src`` so rendering never fails on hostile input.

Example
-------
>>> resolve_image("./img/logo.png", "/docs", lambda path: path)
'/docs/img/logo.png'
>>> resolve_image("../../etc/passwd", "/docs/files", lambda path: path)
''
"""

from __future__ import annotations

import html
import logging
import typing as typ
from urllib.parse import quote

from markdown import util

from mdpreview._constants import ASSET_SCHEME

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from .models import RenderState

logger = logging.getLogger(__name__)

REMOTE_PREFIXES = ("http://", "https://")
BLOCKED = ""


def asset_url(path: str) -> str:
    """Return the ``asset:`` URL the viewer uses to serve ``path``."""
    return f"{ASSET_SCHEME}://localhost/{quote(path, safe='')}"


def normalize_path(path: str) -> str:
    """Resolve ``.`` and ``..`` segments using forward slashes.

    Empty and ``.`` segments are dropped and ``..`` pops the last retained
    segment; a leading ``/`` survives for absolute paths.

    >>> normalize_path("/docs/./a/../b//c.png")
    '/docs/b/c.png'
    >>> normalize_path("C:\\\\Users\\\\docs")
    'C:/Users/docs'
    """
    unified = path.replace("\\", "/")
    resolved: list[str] = []
    for part in unified.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if resolved:
                resolved.pop()
            continue
        resolved.append(part)
    prefix = "/" if unified.startswith("/") else ""
    return prefix + "/".join(resolved)


def _decode_src(src: str) -> str:
    """Decode character references the serializer would otherwise keep."""
    return html.unescape(src.replace(util.AMP_SUBSTITUTE, "&"))


def _is_contained(path: str, base_dir: str) -> bool:
    """Return True when ``path`` is ``base_dir`` or lies beneath it."""
    if path == base_dir:
        return True
    root = base_dir if base_dir.endswith("/") else f"{base_dir}/"
    return path.startswith(root)


def resolve_image(
    src: str, base_dir: str, to_resource: typ.Callable[[str], str]
) -> str:
    """Map an image reference onto a loadable URL or ``""`` when blocked.

    Parameters
    ----------
    src : str
        Image source as written in the markdown. Character references are
        decoded before any check, and a local path that still holds ``&``
        afterwards is blocked.
    base_dir : str
        Directory of the open document; resolved images must stay inside it.
    to_resource : Callable[[str], str]
        Converts a contained absolute path into a renderer-loadable URL. It is
        only called once the containment check passes.

    Returns
    -------
    str
        ``src`` for remote images, the converted resource handle for
        contained local paths, and an empty string for anything else.
    """
    src = _decode_src(src)
    if src.startswith(REMOTE_PREFIXES):
        return src
    if ":" in src or "&" in src:
        return BLOCKED

    normalized_dir = normalize_path(base_dir)
    if src.startswith("/"):
        joined = src
    elif src.startswith("./"):
        joined = f"{normalized_dir}/{src[2:]}"
    else:
        joined = f"{normalized_dir}/{src}"

    absolute = normalize_path(joined)
    if not normalized_dir or not _is_contained(absolute, normalized_dir):
        return BLOCKED
    return to_resource(absolute)


def resolve_images(root: Element, state: RenderState) -> Element:
    """Rewrite every ``img`` source in ``root``; a no-op without a directory."""
    if not state.file_dir:
        return root
    for element in root.iter("img"):
        src = element.get("src")
        if not src:
            continue
        resolved = resolve_image(src, state.file_dir, state.to_resource)
        if resolved == BLOCKED:
            logger.debug("blocked image source %r", src)
        element.set("src", resolved)
    return root


__all__ = ["asset_url", "normalize_path", "resolve_image", "resolve_images"]
