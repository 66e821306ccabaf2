"""Shared dataclasses used by the rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from markdown.util import HtmlStash


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """Table-of-contents entry for a level 1-3 heading.

    Attributes
    ----------
    level : int
        Heading level (``1``, ``2`` or ``3``).
    title : str
        Plain heading text with inline formatting removed.
    id : str
        Anchor identifier assigned to the heading element.
    """

    level: int
    title: str
    id: str

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the ``{level, title, id}`` mapping handed to the UI layer."""
        return {"level": self.level, "title": self.title, "id": self.id}


@dc.dataclass(frozen=True, slots=True)
class RenderResult:
    """Sanitized markup plus the ordered table of contents for one render."""

    html: str
    toc: tuple[TocEntry, ...] = ()

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the ``{html, toc}`` mapping handed to the UI layer."""
        return {"html": self.html, "toc": [entry.to_dict() for entry in self.toc]}


@dc.dataclass(slots=True)
class RenderState:
    """Per-call state threaded through every tree stage.

    A fresh instance is created for each ``render_markdown`` call, so the
    used-id set and the TOC accumulator never leak between documents.

    Attributes
    ----------
    file_dir : str or None
        Directory of the open document; anchors image containment checks.
    to_resource : Callable[[str], str]
        Converts a contained absolute path into a renderer-loadable URL.
    stash : HtmlStash or None
        Python-Markdown's stash, used to recover text hidden behind
        placeholders when reading heading titles.
    used_ids : set[str]
        Heading ids already assigned in this document.
    toc : list[TocEntry]
        Accumulated level 1-3 headings in document order.
    """

    file_dir: str | None
    to_resource: typ.Callable[[str], str]
    stash: HtmlStash | None = None
    used_ids: set[str] = dc.field(default_factory=set)
    toc: list[TocEntry] = dc.field(default_factory=list)


__all__ = ["RenderResult", "RenderState", "TocEntry"]
