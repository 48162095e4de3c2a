"""
Fixtures that stand in for a Playwright page.

``mock_page`` behaves like a tiny DOM: ``page.locator(css)`` returns the
same mock for the same selector, and every locator scopes its own
children the same way, so tests can reach into exactly the element a
page object touched.

Key Concepts Demonstrated:
- unittest.mock MagicMock with side effects
- Deterministic defaults for probes (hidden, empty, zero)
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

BASE_URL = "https://shop.test"


def _make_scope(name: str) -> MagicMock:
    scope = MagicMock(name=name)
    children: dict[str, MagicMock] = {}
    positions: dict[int, MagicMock] = {}

    def _locator(css: str) -> MagicMock:
        if css not in children:
            children[css] = _make_scope(f"{name} >> {css}")
        return children[css]

    def _nth(index: int) -> MagicMock:
        if index not in positions:
            positions[index] = _make_scope(f"{name} >> nth={index}")
        return positions[index]

    scope.locator.side_effect = _locator
    scope.nth.side_effect = _nth
    scope.is_visible.return_value = False
    scope.text_content.return_value = None
    scope.all_text_contents.return_value = []
    scope.count.return_value = 0
    return scope


@pytest.fixture
def shop_url() -> str:
    return BASE_URL


@pytest.fixture
def mock_page() -> MagicMock:
    """MagicMock page whose navigations succeed and whose elements start hidden."""
    page = _make_scope("page")
    page.url = f"{BASE_URL}/"
    page.goto.return_value = MagicMock(ok=True, status=200)
    return page
