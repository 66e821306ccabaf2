"""Render untrusted markdown into sanitized, navigable HTML previews.

The package exposes the rendering pipeline used by the desktop viewer along
with a small CLI for producing standalone preview pages.

Exports
-------
- ``render_markdown``: Markdown source to ``RenderResult`` (markup and TOC).
- ``RenderResult`` / ``TocEntry``: the pipeline's output types.
- ``app``: Cyclopts application behind the ``mdpreview`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdpreview import render_markdown
>>> render_markdown("").html
''
>>> from mdpreview import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .render import RenderResult, TocEntry, render_markdown

__all__ = ["RenderResult", "TocEntry", "app", "main", "render_markdown"]
