"""Unit tests for image path normalization and containment."""

from __future__ import annotations

import typing as typ
from xml.etree import ElementTree as ET  # noqa: N817

import pytest

from mdpreview.render.models import RenderState
from mdpreview.render.paths import (
    asset_url,
    normalize_path,
    resolve_image,
    resolve_images,
)


def _identity(path: str) -> str:
    return path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/docs/./img/../a.png", "/docs/a.png"),
        ("docs//a.png", "docs/a.png"),
        ("/docs/../../../etc", "/etc"),
        ("C:\\Users\\docs\\a.png", "C:/Users/docs/a.png"),
        ("/", "/"),
    ],
)
def test_normalize_path(path: str, expected: str) -> None:
    assert normalize_path(path) == expected


@pytest.mark.parametrize(
    ("src", "base", "expected"),
    [
        ("image.png", "/docs", "/docs/image.png"),
        ("./image.png", "/docs", "/docs/image.png"),
        ("img/../image.png", "/docs", "/docs/image.png"),
        ("/docs/sub/image.png", "/docs", "/docs/sub/image.png"),
        ("image.png", "C:\\Users\\docs", "C:/Users/docs/image.png"),
        ("sub&#47;image.png", "/docs", "/docs/sub/image.png"),
    ],
)
def test_contained_paths_resolve(src: str, base: str, expected: str) -> None:
    assert resolve_image(src, base, _identity) == expected


@pytest.mark.parametrize(
    ("src", "base"),
    [
        ("../../etc/passwd", "/docs/files"),
        ("/absolute/image.png", "/docs"),
        ("../docs-evil/image.png", "/docs"),
        ("..\\..\\secret.png", "/docs/files"),
        ("data:image/png;base64,abc", "/docs"),
        ("javascript:alert(1)", "/docs"),
        ("file:///etc/passwd", "/docs"),
        ("ftp://server/img.png", "/docs"),
        ("HTTP://example.com/img.png", "/docs"),
        ("&#46;&#46;/&#46;&#46;/etc/passwd", "/docs/files"),
        ("&#x2e;&#x2e;&#x2f;secret.png", "/docs/files"),
        ("&amp;#46;&amp;#46;/secret.png", "/docs/files"),
        ("data&#58;image/png;base64,abc", "/docs"),
    ],
)
def test_escaping_or_foreign_sources_are_blocked(src: str, base: str) -> None:
    calls: list[str] = []
    assert resolve_image(src, base, calls.append) == ""
    assert calls == []


@pytest.mark.parametrize(
    "src", ["http://example.com/a.png", "https://example.com/a.png"]
)
def test_remote_images_pass_through(src: str) -> None:
    assert resolve_image(src, "/docs", _identity) == src


def test_asset_url_encodes_the_whole_path() -> None:
    assert asset_url("/docs/my image.png") == (
        "asset://localhost/%2Fdocs%2Fmy%20image.png"
    )


def test_resolve_images_is_noop_without_directory(
    to_resource: typ.Callable[[str], str],
) -> None:
    root = ET.fromstring('<p><img src="image.png"/><img src="data:x"/></p>')
    state = RenderState(file_dir=None, to_resource=to_resource)

    resolve_images(root, state)

    assert [img.get("src") for img in root.iter("img")] == ["image.png", "data:x"]


def test_resolve_images_rewrites_each_image(
    to_resource: typ.Callable[[str], str],
) -> None:
    root = ET.fromstring(
        '<p><img src="./a.png"/><img src="../b.png"/>'
        '<img src="https://example.com/c.png"/></p>'
    )
    state = RenderState(file_dir="/docs", to_resource=to_resource)

    resolve_images(root, state)

    assert [img.get("src") for img in root.iter("img")] == [
        "asset://localhost/docs/a.png",
        "",
        "https://example.com/c.png",
    ]
