"""Cyclopts CLI entrypoint for previewing markdown documents.

The ``mdpreview`` console script defined here renders a markdown file through
the same sanitizing pipeline the viewer uses and writes a standalone HTML
preview page, or prints the document's table of contents.

Examples
--------
Render a document next to the configured output folder:

>>> from mdpreview.cli import app
>>> app(["render", "README.md", "--dark"])  # doctest: +SKIP

Print the table of contents:

>>> app(["toc", "README.md"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .config import load_viewer_config
from .documents import load_document, render_document
from .preview_page import PreviewPageBuilder

app = App(name="mdpreview", help="Render markdown into sanitized HTML previews.")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render a markdown file into a standalone HTML preview page.")
def render(
    path: typ.Annotated[Path, Parameter(help="Markdown file to render")],
    *,
    dark: typ.Annotated[
        bool | None, Parameter(help="Force the dark or light highlighting style")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the preview page")
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to viewer config", env_var="MDPREVIEW_CONFIG"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log pipeline details")] = False,
) -> None:
    """Render ``path`` and write the preview page.

    Parameters
    ----------
    path : Path
        Markdown document to render.
    dark : bool or None, optional
        Overrides the configured colour mode when given.
    output : Path or None, optional
        Output file; defaults to ``<output_dir>/<stem>.html``.
    config : Path or None, optional
        Viewer configuration YAML (overridable via ``MDPREVIEW_CONFIG``).
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the preview page and prints its location.

    Raises
    ------
    DocumentError
        If the file is not markdown or exceeds the size limit.
    ViewerConfigError
        If the configuration file holds invalid values.
    """
    _configure_logging(verbose)
    viewer_config = load_viewer_config(config)
    is_dark = viewer_config.is_dark if dark is None else dark
    document = load_document(path, viewer_config)
    result = render_document(document, is_dark=is_dark)
    target = output or viewer_config.output_dir / f"{path.stem}.html"
    builder = PreviewPageBuilder(title_suffix=viewer_config.title_suffix)
    written = builder.write(document, result, target, is_dark=is_dark)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the table of contents of a markdown file.")
def toc(
    path: typ.Annotated[Path, Parameter(help="Markdown file to inspect")],
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to viewer config", env_var="MDPREVIEW_CONFIG"),
    ] = None,
) -> None:
    """Print one indented ``title (#id)`` line per level 1-3 heading."""
    viewer_config = load_viewer_config(config)
    document = load_document(path, viewer_config)
    result = render_document(document, is_dark=viewer_config.is_dark)
    for entry in result.toc:
        indent = "  " * (entry.level - 1)
        print(f"{indent}{entry.title} (#{entry.id})")


def main() -> None:
    """Invoke the Cyclopts application behind the ``mdpreview`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
