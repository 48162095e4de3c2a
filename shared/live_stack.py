"""Shared storefront-availability helpers for the browser test suites."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Generator

import pytest
import requests

logger = logging.getLogger(__name__)


def is_storefront_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the storefront landing page responds with 2xx."""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException:
        return False
    return response.ok


def wait_for_storefront(url: str, timeout: int = 60, interval: int = 1) -> None:
    """Poll the storefront landing page until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_storefront_ready(url):
            logger.info("Storefront at %s is reachable", url)
            return
        time.sleep(interval)
    raise RuntimeError(f"Storefront at {url} not reachable after {timeout}s")


def live_storefront_url(
    *,
    base_url_env: str,
    suite_name: str,
    timeout: int = 60,
) -> Generator[str, None, None]:
    """
    Yield a reachable storefront base URL.

    The browser suites only run against an explicit deployment: when
    ``base_url_env`` is unset the requesting tests are skipped.
    """
    provided_base_url = os.getenv(base_url_env)
    if not provided_base_url:
        pytest.skip(f"set {base_url_env} to run {suite_name} tests")

    base_url = provided_base_url.rstrip("/")
    wait_for_storefront(base_url, timeout=timeout)
    yield base_url
