"""Allow-list HTML sanitization for rendered markdown.

The sanitizer runs after every tree stage has finished (heading ids, image
resolution, link policy) so it never strips what those stages add. It is a
thin layer over ``bleach``: :class:`SanitizeSchema` describes the permitted
tags, attributes, and URL schemes, and :func:`sanitize_html` applies it.

Some tags and attributes can never be allowed regardless of configuration:
``script``, ``iframe`` and the other entries of :data:`FORBIDDEN_TAGS`, and
every inline event handler (``on*``).
"""

from __future__ import annotations

import dataclasses as dc
import threading
import typing as typ

from bleach.sanitizer import ALLOWED_PROTOCOLS, ALLOWED_TAGS, Cleaner

from mdpreview._constants import ASSET_SCHEME, EXTERNAL_LINK_ATTR

FORBIDDEN_TAGS = frozenset(
    {"script", "iframe", "object", "embed", "style", "frame", "frameset"}
)
GLOBAL_ATTRIBUTES = frozenset({"id", "class"})


class SanitizeSchemaError(ValueError):
    """Raised when a schema tries to allow forbidden tags or attributes."""


@dc.dataclass(frozen=True, slots=True)
class SanitizeSchema:
    """Allow-list configuration consumed by :func:`sanitize_html`.

    Attributes
    ----------
    tags : frozenset[str]
        Element names kept in the output; others are stripped.
    attributes : Mapping[str, frozenset[str]]
        Permitted attributes per tag. The ``"*"`` key applies to every tag.
    protocols : frozenset[str]
        URL schemes accepted in ``href``/``src`` style attributes.
    scoped_protocols : Mapping[str, frozenset[tuple[str, str]]]
        Schemes honoured only on specific ``(tag, attribute)`` pairs.
    """

    tags: frozenset[str]
    attributes: typ.Mapping[str, frozenset[str]]
    protocols: frozenset[str]
    scoped_protocols: typ.Mapping[str, frozenset[tuple[str, str]]] = dc.field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Reject schemas that would let executable markup through."""
        forbidden = sorted(self.tags & FORBIDDEN_TAGS)
        if forbidden:
            msg = f"Tags can never be allowed: {', '.join(forbidden)}"
            raise SanitizeSchemaError(msg)
        for tag, names in self.attributes.items():
            handlers = sorted(name for name in names if _is_event_handler(name))
            if handlers:
                msg = f"Event handler attributes on '{tag}': {', '.join(handlers)}"
                raise SanitizeSchemaError(msg)

    def allows_attribute(self, tag: str, name: str, value: str) -> bool:
        """Return True when ``name=value`` may stay on ``tag``."""
        if _is_event_handler(name):
            return False
        allowed = self.attributes.get(tag, frozenset()) | self.attributes.get(
            "*", frozenset()
        )
        if name not in allowed:
            return False
        if tag == "input" and name == "type":
            return value.strip().lower() == "checkbox"
        scheme = _scheme_of(value)
        scope = self.scoped_protocols.get(scheme) if scheme else None
        return scope is None or (tag, name) in scope


def _is_event_handler(name: str) -> bool:
    return name.lower().startswith("on")


def _scheme_of(value: str) -> str | None:
    head, sep, _rest = value.strip().partition(":")
    if not sep or "/" in head:
        return None
    return head.lower()


def build_default_schema() -> SanitizeSchema:
    """Return the schema used for rendered markdown documents."""
    tags = set(ALLOWED_TAGS) | {
        "p",
        "br",
        "hr",
        "div",
        "span",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "pre",
        "del",
        "ins",
        "sub",
        "sup",
        "img",
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        "caption",
        "dl",
        "dt",
        "dd",
        "kbd",
        "input",
        "details",
        "summary",
    }
    attributes = {
        "*": GLOBAL_ATTRIBUTES,
        "a": frozenset({"href", "title", EXTERNAL_LINK_ATTR}),
        "img": frozenset({"src", "alt", "title", "width", "height"}),
        "input": frozenset({"type", "checked", "disabled"}),
        "th": frozenset({"align"}),
        "td": frozenset({"align"}),
        "ol": frozenset({"start"}),
        "abbr": frozenset({"title"}),
        "acronym": frozenset({"title"}),
    }
    return SanitizeSchema(
        tags=frozenset(tags),
        attributes=attributes,
        protocols=frozenset(ALLOWED_PROTOCOLS) | {ASSET_SCHEME},
        scoped_protocols={ASSET_SCHEME: frozenset({("img", "src")})},
    )


DEFAULT_SCHEMA = build_default_schema()

_local = threading.local()


def _cleaner_for(schema: SanitizeSchema) -> Cleaner:
    """Return this thread's cleaner for ``schema``; cleaners are not shared."""
    cache: dict[int, tuple[SanitizeSchema, Cleaner]] | None = getattr(
        _local, "cleaners", None
    )
    if cache is None:
        cache = {}
        _local.cleaners = cache
    cached = cache.get(id(schema))
    if cached is not None and cached[0] is schema:
        return cached[1]
    cleaner = Cleaner(
        tags=schema.tags,
        attributes=schema.allows_attribute,
        protocols=schema.protocols,
        strip=True,
        strip_comments=True,
    )
    cache[id(schema)] = (schema, cleaner)
    return cleaner


def sanitize_html(html: str, schema: SanitizeSchema = DEFAULT_SCHEMA) -> str:
    """Strip every element, attribute, and URL not allowed by ``schema``."""
    if not html:
        return ""
    return _cleaner_for(schema).clean(html)


__all__ = [
    "DEFAULT_SCHEMA",
    "FORBIDDEN_TAGS",
    "SanitizeSchema",
    "SanitizeSchemaError",
    "build_default_schema",
    "sanitize_html",
]
