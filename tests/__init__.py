"""
Test suite for the Sauce Demo storefront.

This package contains:
- e2e/: Playwright browser tests built on page objects
- unit/: Page object and helper tests against a mocked page
"""
