"""
Accessibility audits backed by axe-core.

axe-core is injected into the page under test and does all rule
evaluation. This module only runs it, shapes the raw result into typed
values, and applies the suite's pass rule: no critical and no serious
violations.

Key Concepts Demonstrated:
- Injecting a third-party audit engine with ``page.add_script_tag``
- Keeping provider output as plain data for assertions
- Impact-based gating instead of zero-tolerance gating
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Page

from shared.test_data import IMPACT_LEVELS, WCAG_AA_TAGS

logger = logging.getLogger(__name__)

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

FOCUSABLE_SELECTOR = 'a, button, input, select, textarea, [tabindex]:not([tabindex="-1"])'

_AXE_RUN_SCRIPT = """
async (tags) => {
    const options = tags ? { runOnly: { type: 'tag', values: tags } } : {};
    return await axe.run(document, options);
}
"""

_UNLABELLED_FIELDS_SCRIPT = """
() => Array.from(document.querySelectorAll('input, select, textarea'))
    .filter((el) => el.type !== 'hidden')
    .filter((el) => {
        const byFor = el.id && document.querySelector(`label[for="${el.id}"]`);
        return !(byFor || el.closest('label') || el.getAttribute('aria-label')
            || el.getAttribute('aria-labelledby') || el.getAttribute('placeholder'));
    }).length
"""


@dataclass
class AccessibilityResults:
    """The parts of an axe run the suite asserts on."""

    url: str
    violations: list[dict[str, Any]] = field(default_factory=list)
    passes: list[dict[str, Any]] = field(default_factory=list)
    incomplete: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ImpactSummary:
    """Violation counts per impact level."""

    passed: bool
    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0


def _inject_axe(page: Page) -> None:
    if not page.evaluate("() => typeof window.axe !== 'undefined'"):
        page.add_script_tag(url=AXE_CDN)


def run_accessibility_audit(
    page: Page, tags: list[str] | tuple[str, ...] | None = None
) -> AccessibilityResults:
    """
    Run axe-core against the current document.

    Args:
        page: Page showing the document to audit.
        tags: Optional axe rule tags to restrict the run to.

    Returns:
        AccessibilityResults for the page's current URL.
    """
    _inject_axe(page)
    raw = page.evaluate(_AXE_RUN_SCRIPT, list(tags) if tags else None)
    results = AccessibilityResults(
        url=page.url,
        violations=raw.get("violations", []),
        passes=raw.get("passes", []),
        incomplete=raw.get("incomplete", []),
    )
    logger.info(
        "axe audit of %s: %d violations, %d passes",
        results.url,
        len(results.violations),
        len(results.passes),
    )
    return results


def run_wcag_aa_audit(page: Page) -> AccessibilityResults:
    return run_accessibility_audit(page, tags=WCAG_AA_TAGS)


def summarize_violations(results: AccessibilityResults) -> ImpactSummary:
    """Count violations per impact; the page passes without critical or serious ones."""
    counts = Counter(violation.get("impact") for violation in results.violations)
    by_level = {level: counts.get(level, 0) for level in IMPACT_LEVELS}
    return ImpactSummary(
        passed=by_level["critical"] == 0 and by_level["serious"] == 0,
        **by_level,
    )


def format_violations(violations: list[dict[str, Any]]) -> str:
    """Render violations compactly for assertion messages."""
    condensed = [
        {
            "id": violation.get("id"),
            "impact": violation.get("impact"),
            "help": violation.get("help"),
            "targets": [node.get("target") for node in violation.get("nodes", [])],
        }
        for violation in violations
    ]
    return json.dumps(condensed, indent=2)


def count_focusable_elements(page: Page) -> int:
    """Number of elements reachable with the Tab key."""
    return page.locator(FOCUSABLE_SELECTOR).count()


def count_unlabelled_form_fields(page: Page) -> int:
    """Number of visible form fields without any accessible label."""
    return page.evaluate(_UNLABELLED_FIELDS_SCRIPT)
