"""Playwright fixtures for the storefront browser tests."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from config import Config
from shared.live_stack import live_storefront_url
from tests.e2e.flows import login_with_valid_credentials
from tests.e2e.pages.base_page import SCREENSHOT_DIR
from tests.e2e.pages.cart_page import CartPage
from tests.e2e.pages.checkout_complete_page import CheckoutCompletePage
from tests.e2e.pages.checkout_info_page import CheckoutInfoPage
from tests.e2e.pages.checkout_overview_page import CheckoutOverviewPage
from tests.e2e.pages.inventory_page import InventoryPage
from tests.e2e.pages.login_page import LoginPage


@pytest.fixture(scope="session")
def storefront_url() -> Generator[str, None, None]:
    """
    Return a reachable storefront URL for browser tests.

    The suite only runs against an explicit deployment: set TEST_BASE_URL
    (e.g. https://www.saucedemo.com) or the browser tests are skipped.
    """
    yield from live_storefront_url(base_url_env="TEST_BASE_URL", suite_name="browser")


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: dict, suite_config: type[Config]) -> dict:
    # --headed on the command line still wins
    return {"headless": suite_config.HEADLESS, **browser_type_launch_args}


@pytest.fixture(scope="session")
def browser_context_args(suite_config: type[Config]):
    return {
        "viewport": dict(suite_config.VIEWPORT),
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(
    browser: Browser, browser_context_args: dict, suite_config: type[Config]
) -> Generator[BrowserContext, None, None]:
    context = browser.new_context(**browser_context_args)
    context.set_default_timeout(suite_config.TIMEOUT_MS)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture
def load_timeout(suite_config: type[Config]) -> int:
    return suite_config.LOAD_TIMEOUT_MS


# -----------------------------------------------------------------------------
# Page Object Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def login_page(page: Page, storefront_url: str, load_timeout: int) -> LoginPage:
    login = LoginPage(page, storefront_url, load_timeout)
    login.goto()
    login.wait_for_load()
    return login


@pytest.fixture
def inventory_page(page: Page, storefront_url: str, load_timeout: int) -> InventoryPage:
    """Inventory page of a freshly logged-in standard user."""
    return login_with_valid_credentials(page, storefront_url, load_timeout)


@pytest.fixture
def cart_page(page: Page, storefront_url: str, load_timeout: int) -> CartPage:
    return CartPage(page, storefront_url, load_timeout)


@pytest.fixture
def checkout_info_page(page: Page, storefront_url: str, load_timeout: int) -> CheckoutInfoPage:
    return CheckoutInfoPage(page, storefront_url, load_timeout)


@pytest.fixture
def checkout_overview_page(
    page: Page, storefront_url: str, load_timeout: int
) -> CheckoutOverviewPage:
    return CheckoutOverviewPage(page, storefront_url, load_timeout)


@pytest.fixture
def checkout_complete_page(
    page: Page, storefront_url: str, load_timeout: int
) -> CheckoutCompletePage:
    return CheckoutCompletePage(page, storefront_url, load_timeout)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on UI test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            os.makedirs(SCREENSHOT_DIR, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = SCREENSHOT_DIR / f"{test_name}.png"
            try:
                page.screenshot(path=screenshot_path)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
