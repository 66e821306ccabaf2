"""Markdown to sanitized HTML rendering pipeline.

:func:`render_markdown` is the single entry point. One call runs these steps
in order:

1. parse with Python-Markdown plus GFM-style extensions (tables,
   strikethrough, task lists, bare URL autolinks), raw HTML disabled;
2. the tree stages in :data:`TREE_STAGES`: heading ids and TOC, image path
   resolution, link policy;
3. serialization;
4. allow-list sanitization;
5. syntax highlighting of fenced code blocks.

Each call works on its own parser, tree, and :class:`RenderState`; only the
warmed highlighter is shared between calls.

Example
-------
>>> result = render_markdown("# Hello World")
>>> result.toc[0].id
'hello-world'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .highlighter import highlight_code_blocks
from .links import apply_link_policy
from .models import RenderResult, RenderState
from .paths import asset_url, resolve_images
from .sanitizer import DEFAULT_SCHEMA, SanitizeSchema, sanitize_html
from .slugs import assign_heading_ids

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

TreeStage = typ.Callable[["Element", RenderState], "Element"]

TREE_STAGES: tuple[TreeStage, ...] = (
    assign_heading_ids,
    resolve_images,
    apply_link_policy,
)

MARKDOWN_EXTENSIONS = (
    "tables",
    "fenced_code",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.tasklist",
    "pymdownx.magiclink",
)
EXTENSION_CONFIGS: dict[str, dict[str, typ.Any]] = {
    "tables": {"use_align_attribute": True},
    "pymdownx.tasklist": {"custom_checkbox": False, "clickable_checkbox": False},
}

FENCE_LINE_PATTERN = re.compile(r"^[ ]{0,3}(?P<fence>`{3,}|~{3,})(?P<info>[^\r\n]*)$")
FENCE_LABEL_PATTERN = re.compile(r"^([A-Za-z0-9_+#.-]+)?,")


def _fence_label(info: str) -> str:
    match = FENCE_LABEL_PATTERN.match(info)
    if match is None:
        return info
    return match.group(1) or ""


def _closes(fence: str, info: str, opening: str) -> bool:
    return fence[0] == opening[0] and len(fence) >= len(opening) and not info.strip()


def normalize_fenced_blocks(text: str) -> str:
    """Dedent lightly indented fences and drop ``,extra`` fence labels.

    Only opening and closing fence lines are rewritten. Lines inside an open
    fence, including nested fence markers of another kind or a shorter run,
    are left exactly as written.
    """
    opening: str | None = None
    lines: list[str] = []
    for line in text.split("\n"):
        body = line.rstrip("\r")
        ending = line[len(body) :]
        match = FENCE_LINE_PATTERN.match(body)
        if match is None:
            lines.append(line)
            continue
        fence, info = match.group("fence", "info")
        if opening is None:
            opening = fence
            lines.append(f"{fence}{_fence_label(info)}{ending}")
        elif _closes(fence, info, opening):
            opening = None
            lines.append(f"{fence}{ending}")
        else:
            lines.append(line)
    return "\n".join(lines)


class TreeStageProcessor(Treeprocessor):
    """Run the tree stages, in order, against the parsed document."""

    def __init__(
        self, md: Markdown, state: RenderState, stages: tuple[TreeStage, ...]
    ) -> None:
        super().__init__(md)
        self.state = state
        self.stages = stages

    def run(self, root: Element) -> Element:
        """Thread the per-call state through every stage."""
        self.state.stash = self.md.htmlStash
        for stage in self.stages:
            root = stage(root, self.state)
        return root


class RenderExtension(Extension):
    """Disable raw HTML and register the tree stages on a Markdown instance."""

    def __init__(
        self, state: RenderState, stages: tuple[TreeStage, ...] = TREE_STAGES
    ) -> None:
        super().__init__()
        self.state = state
        self.stages = stages

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Drop raw HTML handling and run the stages after ``unescape``."""
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)
        processor = TreeStageProcessor(md, self.state, self.stages)
        md.treeprocessors.register(processor, "mdpreview_stages", -10)


def build_markdown(
    state: RenderState, stages: tuple[TreeStage, ...] = TREE_STAGES
) -> Markdown:
    """Return a fresh Markdown parser wired to ``state``."""
    return Markdown(
        extensions=[*MARKDOWN_EXTENSIONS, RenderExtension(state, stages)],
        extension_configs=EXTENSION_CONFIGS,
        output_format="html",
    )


def render_markdown(
    content: str,
    file_dir: str | None = None,
    is_dark: bool = False,
    *,
    to_resource: typ.Callable[[str], str] = asset_url,
    schema: SanitizeSchema = DEFAULT_SCHEMA,
) -> RenderResult:
    """Render untrusted markdown into sanitized HTML and a table of contents.

    Parameters
    ----------
    content : str
        Markdown source. Empty or blank input yields an empty result.
    file_dir : str, optional
        Directory of the open document. Local images must resolve inside it;
        when ``None`` image sources are left unchanged.
    is_dark : bool, optional
        Highlight code with the dark style.
    to_resource : Callable[[str], str], optional
        Converts a contained image path into a loadable URL; defaults to
        :func:`asset_url`.
    schema : SanitizeSchema, optional
        Allow-list applied after the tree stages.

    Returns
    -------
    RenderResult
        The markup and the level 1-3 headings in document order.

    Raises
    ------
    Exception
        Only parser-level failures propagate. Hostile links, images, and
        markup are neutralised rather than reported.
    """
    normalized = normalize_fenced_blocks(content)
    if not normalized.strip():
        return RenderResult(html="", toc=())

    state = RenderState(file_dir=file_dir, to_resource=to_resource)
    html = build_markdown(state).convert(normalized)
    html = sanitize_html(html, schema)
    html = highlight_code_blocks(html, is_dark)
    logger.debug("rendered document with %d toc entries", len(state.toc))
    return RenderResult(html=html, toc=tuple(state.toc))


__all__ = [
    "MARKDOWN_EXTENSIONS",
    "TREE_STAGES",
    "RenderExtension",
    "TreeStage",
    "TreeStageProcessor",
    "build_markdown",
    "normalize_fenced_blocks",
    "render_markdown",
]
