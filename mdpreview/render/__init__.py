"""Utilities for rendering untrusted markdown into sanitized, navigable HTML."""

from .highlighter import CodeHighlighter, get_highlighter, highlight_code_blocks
from .links import LinkKind, apply_link_policy, classify_href
from .models import RenderResult, RenderState, TocEntry
from .paths import asset_url, normalize_path, resolve_image, resolve_images
from .pipeline import TREE_STAGES, render_markdown
from .sanitizer import DEFAULT_SCHEMA, SanitizeSchema, SanitizeSchemaError, sanitize_html
from .slugs import assign_heading_ids, slugify, unique_heading_id

__all__ = [
    "DEFAULT_SCHEMA",
    "TREE_STAGES",
    "CodeHighlighter",
    "LinkKind",
    "RenderResult",
    "RenderState",
    "SanitizeSchema",
    "SanitizeSchemaError",
    "TocEntry",
    "apply_link_policy",
    "assign_heading_ids",
    "asset_url",
    "classify_href",
    "get_highlighter",
    "highlight_code_blocks",
    "normalize_path",
    "render_markdown",
    "resolve_image",
    "resolve_images",
    "sanitize_html",
    "slugify",
    "unique_heading_id",
]
