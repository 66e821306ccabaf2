"""Syntax highlighting for fenced code blocks in rendered markup.

Highlighting runs as a string pass over the sanitized, serialized markup:
each ``<pre><code class="language-x">`` block is decoded, highlighted with
Pygments, and wrapped in a ``highlight-container`` element carrying a
``data-language`` attribute. A block that fails to highlight keeps its
original markup and the rest of the document is still processed.

The :class:`CodeHighlighter` preloads its lexers and both formatters, which
makes construction comparatively slow. :func:`get_highlighter` builds it once
per process and hands the same instance to every render.
"""

from __future__ import annotations

import logging
import re
import threading
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from mdpreview._constants import DARK_STYLE, HIGHLIGHT_CONTAINER_CLASS, LIGHT_STYLE

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(
    r'<pre><code(?:\s+class="language-([A-Za-z0-9_+#.-]+)")?>(.*?)</code></pre>',
    re.DOTALL,
)
ENTITY_PATTERN = re.compile(r"&(?:lt|gt|amp|quot|#39);")
ENTITIES = {"&lt;": "<", "&gt;": ">", "&amp;": "&", "&quot;": '"', "&#39;": "'"}

PLAIN_TEXT = "text"
LANGUAGE_ALIASES: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "sh": "bash",
    "zsh": "bash",
    "yml": "yaml",
}
DEFAULT_LANGUAGES = (
    "javascript",
    "typescript",
    "python",
    "rust",
    "go",
    "java",
    "c",
    "cpp",
    "csharp",
    "php",
    "ruby",
    "swift",
    "kotlin",
    "json",
    "yaml",
    "xml",
    "html",
    "css",
    "scss",
    "sql",
    "bash",
    "shell",
    "powershell",
    "markdown",
    "dockerfile",
    "graphql",
    "vue",
    "jsx",
    "tsx",
)


def decode_entities(code: str) -> str:
    """Decode the five entities the serializer emits, in a single pass."""
    return ENTITY_PATTERN.sub(lambda match: ENTITIES[match.group(0)], code)


def canonical_language(label: str | None) -> str:
    """Map a fence label onto a canonical language name.

    >>> canonical_language("js")
    'javascript'
    >>> canonical_language(None)
    'text'
    """
    if not label:
        return PLAIN_TEXT
    lowered = label.lower()
    return LANGUAGE_ALIASES.get(lowered, lowered)


class CodeHighlighter:
    """Pygments lexers and light/dark formatters, loaded up front."""

    def __init__(
        self,
        languages: tuple[str, ...] = DEFAULT_LANGUAGES,
        *,
        light_style: str = LIGHT_STYLE,
        dark_style: str = DARK_STYLE,
    ) -> None:
        """Load a lexer per language and a formatter per theme.

        Parameters
        ----------
        languages : tuple[str, ...], optional
            Language names to preload. Names Pygments does not know are
            skipped and left out of :attr:`loaded_languages`.
        light_style, dark_style : str, optional
            Pygments style names used for light and dark rendering.
        """
        self._lexers: dict[str, Lexer] = {PLAIN_TEXT: get_lexer_by_name(PLAIN_TEXT)}
        for name in languages:
            try:
                self._lexers[name] = get_lexer_by_name(name)
            except ClassNotFound:
                logger.debug("no Pygments lexer for %r; skipping", name)
        self._formatters = {
            False: HtmlFormatter(style=light_style, noclasses=True),
            True: HtmlFormatter(style=dark_style, noclasses=True),
        }

    @property
    def loaded_languages(self) -> frozenset[str]:
        """Return the language names that can be highlighted."""
        return frozenset(self._lexers)

    def code_to_html(self, code: str, language: str, *, is_dark: bool) -> str:
        """Highlight ``code``; unknown languages fall back to plain text."""
        lexer = self._lexers.get(language) or self._lexers[PLAIN_TEXT]
        return highlight(code, lexer, self._formatters[is_dark])

    def highlight_block(self, code: str, label: str | None, *, is_dark: bool) -> str:
        """Return a highlighted block wrapped in the container element."""
        language = canonical_language(label)
        if language not in self._lexers:
            language = PLAIN_TEXT
        body = self.code_to_html(code, language, is_dark=is_dark)
        return (
            f'<div class="{HIGHLIGHT_CONTAINER_CLASS}" '
            f'data-language="{escape(language, quote=True)}">{body}</div>'
        )


_highlighter: CodeHighlighter | None = None
_highlighter_lock = threading.Lock()


def get_highlighter() -> CodeHighlighter:
    """Return the process-wide highlighter, building it on first use."""
    global _highlighter  # noqa: PLW0603
    instance = _highlighter
    if instance is not None:
        return instance
    with _highlighter_lock:
        if _highlighter is None:
            logger.debug("warming up syntax highlighter")
            _highlighter = CodeHighlighter()
        return _highlighter


def reset_highlighter() -> None:
    """Drop the cached highlighter so the next call rebuilds it."""
    global _highlighter  # noqa: PLW0603
    with _highlighter_lock:
        _highlighter = None


def highlight_code_blocks(
    html: str, is_dark: bool = False, highlighter: CodeHighlighter | None = None
) -> str:
    """Highlight every fenced code block in ``html``.

    Parameters
    ----------
    html : str
        Sanitized markup produced by the pipeline.
    is_dark : bool, optional
        Selects the dark style instead of the light one.
    highlighter : CodeHighlighter, optional
        Instance to use; defaults to the shared :func:`get_highlighter`.

    Returns
    -------
    str
        Markup with highlighted blocks. Blocks that fail to highlight are
        left exactly as they were.
    """
    if "<pre><code" not in html:
        return html
    engine = highlighter or get_highlighter()

    def _repl(match: re.Match[str]) -> str:
        label, code = match.groups()
        try:
            return engine.highlight_block(decode_entities(code), label, is_dark=is_dark)
        except Exception:  # noqa: BLE001
            logger.warning("could not highlight %r code block", label, exc_info=True)
            return match.group(0)

    return CODE_BLOCK_PATTERN.sub(_repl, html)


__all__ = [
    "CODE_BLOCK_PATTERN",
    "CodeHighlighter",
    "DEFAULT_LANGUAGES",
    "LANGUAGE_ALIASES",
    "canonical_language",
    "decode_entities",
    "get_highlighter",
    "highlight_code_blocks",
    "reset_highlighter",
]
