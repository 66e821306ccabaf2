"""Standalone HTML preview pages.

``PreviewPageBuilder`` wraps a rendered document in the ``preview_page.jinja``
template: a table-of-contents sidebar linking to the heading anchors and the
sanitized body. The builder relies on Jinja2 with autoescape enabled; the body
markup has already been sanitized by the renderer and is inserted verbatim.

>>> from pathlib import Path
>>> from mdpreview.documents import Document, render_document
>>> document = Document(Path("notes.md"), "# Notes", "/tmp")
>>> page = PreviewPageBuilder().render(document, render_document(document))
>>> 'href="#notes"' in page
True
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    from mdpreview.documents import Document
    from mdpreview.render import RenderResult


class PreviewPageBuilder:
    """Render a preview page for one document."""

    def __init__(
        self, *, templates_dir: Path | None = None, title_suffix: str = "Preview"
    ) -> None:
        """Initialize the Jinja environment and load the page template.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``mdpreview/templates``.
        title_suffix : str, optional
            Appended to the document name in the page title.
        """
        self.title_suffix = title_suffix
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("preview_page.jinja")

    def render(
        self, document: Document, result: RenderResult, *, is_dark: bool = False
    ) -> str:
        """Return the preview page markup, ending with a newline."""
        context = {
            "title": f"{document.name} - {self.title_suffix}",
            "document": document,
            "html": result.html,
            "toc": result.toc,
            "color_mode": "dark" if is_dark else "light",
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def write(
        self,
        document: Document,
        result: RenderResult,
        output_path: Path,
        *,
        is_dark: bool = False,
    ) -> Path:
        """Render and write the preview page, returning ``output_path``."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            self.render(document, result, is_dark=is_dark), encoding="utf-8"
        )
        return output_path


__all__ = ["PreviewPageBuilder"]
