"""
Page Object Model (POM) classes for the storefront browser tests.

This package contains page objects that encapsulate page-specific
locators and interactions. Every page wrapper implements
``PageContract`` and composes a ``PageActions`` helper instead of
inheriting from a base class.
"""

from tests.e2e.pages.base_page import ComponentContract, PageActions, PageContract, Selector
from tests.e2e.pages.cart_page import CartPage
from tests.e2e.pages.checkout_complete_page import CheckoutCompletePage
from tests.e2e.pages.checkout_info_page import CheckoutInfoPage
from tests.e2e.pages.checkout_overview_page import CheckoutOverviewPage, OrderSummary
from tests.e2e.pages.components.header import Header
from tests.e2e.pages.errors import (
    InteractionError,
    LoadTimeoutError,
    NavigationError,
    PageObjectError,
)
from tests.e2e.pages.inventory_page import InventoryPage
from tests.e2e.pages.login_page import LoginPage

__all__ = [
    "CartPage",
    "CheckoutCompletePage",
    "CheckoutInfoPage",
    "CheckoutOverviewPage",
    "ComponentContract",
    "Header",
    "InteractionError",
    "InventoryPage",
    "LoadTimeoutError",
    "LoginPage",
    "NavigationError",
    "OrderSummary",
    "PageActions",
    "PageContract",
    "PageObjectError",
    "Selector",
]
