"""Heading anchors and table-of-contents extraction.

Headings receive URL-safe ids derived from their text. Ids are unique within
one document: a repeated title gets ``-1``, ``-2`` and so on appended, and a
title with no usable characters falls back to ``heading-<n>``.

Example
-------
>>> used: set[str] = set()
>>> [unique_heading_id("Title", used) for _ in range(3)]
['title', 'title-1', 'title-2']
>>> slugify("Hello & World!")
'hello-world'
"""

from __future__ import annotations

import html
import re
import typing as typ

from markdown import util

from .models import TocEntry

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown.util import HtmlStash

    from .models import RenderState

HEADING_TAG = re.compile(r"^h([1-6])$")
TOC_MAX_LEVEL = 3

_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def slugify(text: str) -> str:
    """Return a lower-case, hyphen-separated slug for ``text``.

    Characters other than ASCII letters, digits, ``_``, whitespace, and
    hyphens are dropped, so accented letters disappear and non-Latin titles
    such as ``日本語`` produce an empty slug, as do entirely symbolic ones.
    """
    slug = _NON_SLUG_CHARS.sub("", text.lower())
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def unique_heading_id(title: str, used_ids: set[str]) -> str:
    """Return a slug for ``title`` not yet in ``used_ids`` and register it.

    Parameters
    ----------
    title : str
        Plain heading text.
    used_ids : set[str]
        Ids already assigned in the current document. Updated in place.

    Returns
    -------
    str
        ``slugify(title)`` or ``heading-<n>`` when the slug is empty, with a
        numeric suffix appended on collision.
    """
    base = slugify(title) or f"heading-{len(used_ids)}"
    candidate = base
    counter = 1
    while candidate in used_ids:
        candidate = f"{base}-{counter}"
        counter += 1
    used_ids.add(candidate)
    return candidate


def _unstash(text: str, stash: HtmlStash | None) -> str:
    """Swap Python-Markdown placeholders for the text they stand in for."""
    if stash is None:
        return util.HTML_PLACEHOLDER_RE.sub("", text)

    def _repl(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(stash.rawHtmlBlocks):
            return ""
        block = stash.rawHtmlBlocks[index]
        if isinstance(block, str):
            return block
        return "".join(block.itertext())

    return util.HTML_PLACEHOLDER_RE.sub(_repl, text)


def heading_text(element: Element, stash: HtmlStash | None = None) -> str:
    """Concatenate the text leaves under ``element`` into a plain title.

    Inline formatting such as ``**bold**`` contributes only its text, so
    ``# Hello **bold** world`` yields ``"Hello bold world"``.
    """
    raw = "".join(element.itertext())
    raw = _unstash(raw, stash).replace(util.AMP_SUBSTITUTE, "&")
    return html.unescape(raw)


def assign_heading_ids(root: Element, state: RenderState) -> Element:
    """Give every heading an id and record levels 1-3 in ``state.toc``."""
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        match = HEADING_TAG.match(element.tag)
        if not match:
            continue
        level = int(match.group(1))
        title = heading_text(element, state.stash)
        anchor = unique_heading_id(title, state.used_ids)
        element.set("id", anchor)
        if level <= TOC_MAX_LEVEL:
            state.toc.append(TocEntry(level=level, title=title, id=anchor))
    return root


__all__ = [
    "TOC_MAX_LEVEL",
    "assign_heading_ids",
    "heading_text",
    "slugify",
    "unique_heading_id",
]
