"""Helpers shared by the unit and browser test suites."""
