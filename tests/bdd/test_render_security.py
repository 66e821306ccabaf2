"""Behaviour tests for rendering hostile markdown.

These pytest-bdd scenarios prove that untrusted documents render without
raising and that unsafe links, escaping image paths, and embedded markup are
neutralised. The feature file ``render_security.feature`` drives the
scenarios.

Usage
-----
Run ``pytest tests/bdd/test_render_security.py -v``. The scenarios swap the
resource converter for an in-memory stub, so no filesystem access happens.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from mdpreview.render import RenderResult, render_markdown

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "render_security.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _soup(scenario_state: dict[str, object]) -> BeautifulSoup:
    result = typ.cast("RenderResult", scenario_state["result"])
    return BeautifulSoup(result.html, "html.parser")


@given("a document containing a javascript link")
def given_javascript_link(scenario_state: dict[str, object]) -> None:
    """Store markdown with a script-scheme link next to a safe one."""
    scenario_state["markdown"] = (
        "[run](javascript:alert(document.cookie)) and [home](https://example.com)\n"
    )


@given("a document containing an image that escapes its folder")
def given_escaping_image(scenario_state: dict[str, object]) -> None:
    """Store markdown whose image climbs out of the document directory."""
    scenario_state["markdown"] = "![secret](../../etc/passwd)\n"


@given("a document containing an embedded script tag")
def given_script_tag(scenario_state: dict[str, object]) -> None:
    """Store markdown carrying raw script and event-handler markup."""
    scenario_state["markdown"] = (
        "<script>alert(1)</script>\n\n"
        'Inline <img src="x" onerror="alert(1)"> markup.\n'
    )


@when(parsers.parse('I render the document inside "{file_dir}"'))
def when_render(scenario_state: dict[str, object], file_dir: str) -> None:
    """Render the stored markdown with the given document directory."""
    scenario_state["result"] = render_markdown(
        typ.cast("str", scenario_state["markdown"]),
        file_dir,
        to_resource=lambda path: f"asset://localhost/{path.lstrip('/')}",
    )


@then("every link target is safe")
def then_links_safe(scenario_state: dict[str, object]) -> None:
    """Verify links are either inert or external http(s) targets."""
    hrefs = [link["href"] for link in _soup(scenario_state).find_all("a")]
    assert hrefs == ["#", "https://example.com"]


@then(parsers.parse('the rendered HTML does not mention "{needle}"'))
def then_not_mentioned(scenario_state: dict[str, object], needle: str) -> None:
    """Verify the neutralised value is gone from the markup."""
    result = typ.cast("RenderResult", scenario_state["result"])
    assert needle not in result.html


@then("the image source is empty")
def then_image_blocked(scenario_state: dict[str, object]) -> None:
    """Verify the escaping image keeps an empty source."""
    assert _soup(scenario_state).find("img")["src"] == ""


@then("the rendered HTML has no script element")
def then_no_script(scenario_state: dict[str, object]) -> None:
    """Verify raw script markup was not turned into an element."""
    assert _soup(scenario_state).find("script") is None


@then("no element carries an event handler")
def then_no_handlers(scenario_state: dict[str, object]) -> None:
    """Verify no element in the output has an ``on*`` attribute."""
    for element in _soup(scenario_state).find_all(True):
        assert not [name for name in element.attrs if name.lower().startswith("on")]
