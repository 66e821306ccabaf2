"""Unit tests for heading slugs, unique ids, and TOC extraction."""

from __future__ import annotations

from xml.etree import ElementTree as ET  # noqa: N817

import pytest

from mdpreview.render.models import RenderState, TocEntry
from mdpreview.render.slugs import (
    assign_heading_ids,
    heading_text,
    slugify,
    unique_heading_id,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World", "hello-world"),
        ("Hello & World!", "hello-world"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("already-hyphenated -- text", "already-hyphenated-text"),
        ("snake_case stays", "snake_case-stays"),
        ("-dash-wrapped-", "dash-wrapped"),
        ("$$$$", ""),
        ("Café au lait", "caf-au-lait"),
        ("日本語", ""),
        ("Ünïcödé 2", "ncd-2"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_unique_ids_number_repeats_in_order() -> None:
    used: set[str] = set()
    ids = [unique_heading_id("Title", used) for _ in range(4)]
    assert ids == ["title", "title-1", "title-2", "title-3"]
    assert used == set(ids)


def test_unique_ids_skip_taken_suffixes() -> None:
    used = {"title", "title-1"}
    assert unique_heading_id("Title", used) == "title-2"


def test_symbolic_title_falls_back_to_counter() -> None:
    used = {"intro", "usage"}
    assert unique_heading_id("$$$$", used) == "heading-2"
    assert unique_heading_id("!!!", used) == "heading-3"


def test_heading_text_ignores_inline_markup() -> None:
    heading = ET.fromstring("<h1>Hello <strong>bold</strong> world</h1>")
    assert heading_text(heading) == "Hello bold world"


def test_heading_text_decodes_entities() -> None:
    heading = ET.fromstring("<h2>Use <code>a &amp;lt; b</code></h2>")
    assert heading_text(heading) == "Use a < b"


def test_assign_heading_ids_collects_levels_one_to_three() -> None:
    root = ET.fromstring(
        "<div><h1>One</h1><h4>Deep</h4><h2>Two</h2><h3>Three</h3><h6>Deeper</h6></div>"
    )
    state = RenderState(file_dir=None, to_resource=str)

    assign_heading_ids(root, state)

    assert [el.get("id") for el in root] == ["one", "deep", "two", "three", "deeper"]
    assert state.toc == [
        TocEntry(level=1, title="One", id="one"),
        TocEntry(level=2, title="Two", id="two"),
        TocEntry(level=3, title="Three", id="three"),
    ]
