"""Open markdown documents and hand them to the renderer.

The renderer itself never touches the filesystem. This module holds the
caller-side half of the contract: it checks the extension and size of a file
before reading it, derives the directory used to anchor image resolution, and
skips the pipeline entirely for blank documents.

Example
-------
>>> document_dir("/home/me/notes/todo.md")
'/home/me/notes'
>>> document_dir("C:\\\\Users\\\\me\\\\todo.md")
'C:/Users/me'
>>> is_valid_markdown_file("README.MD")
True
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from mdpreview._constants import MAX_FILE_SIZE_BYTES, MAX_FILE_SIZE_MB, VALID_MD_EXTENSIONS
from mdpreview.render import RenderResult, render_markdown

if typ.TYPE_CHECKING:
    from mdpreview.config import ViewerConfig

_PATH_SEPARATORS = re.compile(r"[/\\]")


class DocumentError(ValueError):
    """Raised when a document cannot be opened for preview."""


class UnsupportedDocumentError(DocumentError):
    """Raised when a file does not carry a markdown extension."""


class DocumentTooLargeError(DocumentError):
    """Raised when a file exceeds the configured size limit."""


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A markdown file read into memory.

    Attributes
    ----------
    path : Path
        Location the document was read from.
    content : str
        UTF-8 decoded markdown source.
    file_dir : str or None
        Forward-slash directory of ``path``, used as the image containment
        anchor.
    """

    path: Path
    content: str
    file_dir: str | None

    @property
    def name(self) -> str:
        """Return the file name shown in titles."""
        return self.path.name


def is_valid_markdown_file(
    path: str | Path, extensions: typ.Iterable[str] = VALID_MD_EXTENSIONS
) -> bool:
    """Return True when ``path`` ends in one of ``extensions``."""
    name = _PATH_SEPARATORS.split(str(path))[-1]
    if "." not in name:
        return False
    return name.rsplit(".", 1)[-1].lower() in set(extensions)


def document_dir(path: str | Path | None) -> str | None:
    """Return the directory of ``path`` joined with forward slashes."""
    if not path:
        return None
    parts = _PATH_SEPARATORS.split(str(path))
    parts.pop()
    return "/".join(parts)


def _check_size(size: int, limit: int) -> None:
    if size > limit:
        size_mb = size / (1024 * 1024)
        limit_mb = limit // (1024 * 1024) or MAX_FILE_SIZE_MB
        msg = (
            f"File is too large ({size_mb:.1f} MB). "
            f"Maximum supported size is {limit_mb} MB."
        )
        raise DocumentTooLargeError(msg)


def load_document(path: Path, config: ViewerConfig | None = None) -> Document:
    """Read ``path`` after validating its extension and size.

    Parameters
    ----------
    path : Path
        Markdown file to open.
    config : ViewerConfig, optional
        Supplies the accepted extensions and size limit; module defaults are
        used when omitted.

    Returns
    -------
    Document
        The decoded content and its directory.

    Raises
    ------
    UnsupportedDocumentError
        If the extension is not a markdown extension.
    DocumentTooLargeError
        If the file is larger than the size limit.
    FileNotFoundError
        If ``path`` does not exist.
    """
    extensions = config.extensions if config else VALID_MD_EXTENSIONS
    limit = config.max_file_size_bytes if config else MAX_FILE_SIZE_BYTES
    if not is_valid_markdown_file(path, extensions):
        msg = f"'{path.name}' is not a markdown file ({', '.join(extensions)})."
        raise UnsupportedDocumentError(msg)
    _check_size(path.stat().st_size, limit)
    content = path.read_text(encoding="utf-8")
    return Document(path=path, content=content, file_dir=document_dir(path.resolve()))


def render_document(document: Document, *, is_dark: bool = False) -> RenderResult:
    """Render ``document``, skipping the pipeline when it has no content."""
    if not document.content.strip():
        return RenderResult(html="", toc=())
    return render_markdown(document.content, document.file_dir, is_dark)


__all__ = [
    "Document",
    "DocumentError",
    "DocumentTooLargeError",
    "UnsupportedDocumentError",
    "document_dir",
    "is_valid_markdown_file",
    "load_document",
    "render_document",
]
