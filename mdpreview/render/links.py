"""Allow-list policy for hyperlink targets.

Every ``href`` is classified into exactly one bucket. Remote ``http(s)``
links pass through and are flagged with ``data-external``; ``#`` anchors and
``mailto:`` links pass through unflagged; anything else is rewritten to the
inert anchor ``#``.
"""

from __future__ import annotations

import enum
import html
import logging
import typing as typ

from markdown import util

from mdpreview._constants import EXTERNAL_LINK_ATTR

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from .models import RenderState

logger = logging.getLogger(__name__)

INERT_HREF = "#"


class LinkKind(enum.Enum):
    """Buckets recognised by the link policy."""

    EXTERNAL = "external"
    ANCHOR = "anchor"
    MAILTO = "mailto"
    BLOCKED = "blocked"


def _decode_href(href: str) -> str:
    """Undo Python-Markdown's entity obfuscation of automatic e-mail links."""
    if util.AMP_SUBSTITUTE not in href:
        return href
    return html.unescape(href.replace(util.AMP_SUBSTITUTE, "&"))


def classify_href(href: str | None) -> LinkKind:
    """Return the policy bucket for ``href``.

    >>> classify_href("https://example.com").name
    'EXTERNAL'
    >>> classify_href("javascript:alert(1)").name
    'BLOCKED'
    """
    if not href:
        return LinkKind.BLOCKED
    if href.startswith(("http://", "https://")):
        return LinkKind.EXTERNAL
    if href.startswith("#"):
        return LinkKind.ANCHOR
    if href.startswith("mailto:"):
        return LinkKind.MAILTO
    return LinkKind.BLOCKED


def apply_link_policy(root: Element, state: RenderState) -> Element:  # noqa: ARG001
    """Neutralise unsafe links in ``root`` and flag external ones."""
    for element in root.iter("a"):
        href = _decode_href(element.get("href") or "")
        kind = classify_href(href)
        if kind is LinkKind.BLOCKED:
            logger.debug("neutralised link target %r", href)
            element.set("href", INERT_HREF)
            continue
        element.set("href", href)
        if kind is LinkKind.EXTERNAL:
            element.set(EXTERNAL_LINK_ATTR, "true")
    return root


__all__ = ["INERT_HREF", "LinkKind", "apply_link_policy", "classify_href"]
