"""Shared fixtures for the mdpreview test suite."""

from __future__ import annotations

import typing as typ

import pytest


def fake_asset_url(path: str) -> str:
    """Mirror the viewer's resource converter without percent-encoding."""
    return f"asset://localhost/{path.lstrip('/')}"


@pytest.fixture
def to_resource() -> typ.Callable[[str], str]:
    """Return the stub path-to-resource converter used by image tests."""
    return fake_asset_url
