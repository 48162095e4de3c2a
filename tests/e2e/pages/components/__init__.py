"""Reusable UI fragments embedded in page objects."""

from tests.e2e.pages.components.header import Header

__all__ = ["Header"]
