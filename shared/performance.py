"""
Browser-side performance measurement and budget checks.

Timings come from the browser's Navigation Timing, Paint Timing and
PerformanceObserver APIs, read through ``page.evaluate``. Budgets are
loaded from YAML so CI can tighten or relax them without code changes.

Key Concepts Demonstrated:
- Reading Web Vitals from the page instead of timing from the test process
- Threshold configuration in a YAML file
- Returning every breached budget, not just the first
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from playwright.sync_api import Page

from shared.test_data import PERFORMANCE_THRESHOLDS

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_BUDGET_PATH = PROJECT_ROOT / "tests" / "e2e" / "performance_budgets.yml"
VITALS_SETTLE_MS = 3000

_NAVIGATION_TIMING_SCRIPT = """
() => {
    const [navigation] = performance.getEntriesByType('navigation');
    const paint = performance.getEntriesByType('paint')
        .find((entry) => entry.name === 'first-contentful-paint');
    return {
        load_time: navigation ? navigation.loadEventEnd - navigation.startTime : 0,
        dom_content_loaded: navigation
            ? navigation.domContentLoadedEventEnd - navigation.startTime : 0,
        first_contentful_paint: paint ? paint.startTime : 0,
    };
}
"""

# Buffered observers replay entries recorded before the script ran
_CORE_WEB_VITALS_SCRIPT = """
(settleMs) => new Promise((resolve) => {
    const vitals = {
        largest_contentful_paint: 0,
        first_input_delay: 0,
        cumulative_layout_shift: 0,
    };
    const observe = (type, callback) => {
        try {
            new PerformanceObserver((list) => list.getEntries().forEach(callback))
                .observe({ type, buffered: true });
        } catch (error) {
            // entry type not supported by this browser
        }
    };
    observe('largest-contentful-paint', (entry) => {
        vitals.largest_contentful_paint = entry.startTime;
    });
    observe('first-input', (entry) => {
        vitals.first_input_delay = entry.processingStart - entry.startTime;
    });
    observe('layout-shift', (entry) => {
        if (!entry.hadRecentInput) {
            vitals.cumulative_layout_shift += entry.value;
        }
    });
    setTimeout(() => resolve(vitals), settleMs);
})
"""

_MEMORY_SCRIPT = "() => (performance.memory ? performance.memory.usedJSHeapSize : 0)"


@dataclass
class PerformanceMetrics:
    """Timings in milliseconds; layout shift is unitless."""

    load_time: float = 0.0
    dom_content_loaded: float = 0.0
    first_contentful_paint: float = 0.0
    largest_contentful_paint: float = 0.0
    first_input_delay: float = 0.0
    cumulative_layout_shift: float = 0.0
    memory_usage: int = 0


@dataclass(frozen=True)
class PerformanceBudget:
    """Upper bounds a page must stay within."""

    load_time: float = PERFORMANCE_THRESHOLDS["PAGE_LOAD_TIME"]
    first_contentful_paint: float = PERFORMANCE_THRESHOLDS["FIRST_CONTENTFUL_PAINT"]
    largest_contentful_paint: float = PERFORMANCE_THRESHOLDS["LARGEST_CONTENTFUL_PAINT"]
    first_input_delay: float = PERFORMANCE_THRESHOLDS["FIRST_INPUT_DELAY"]
    cumulative_layout_shift: float = PERFORMANCE_THRESHOLDS["CUMULATIVE_LAYOUT_SHIFT"]


@dataclass(frozen=True)
class PerformanceCheck:
    passed: bool
    issues: list[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Measurement
# -----------------------------------------------------------------------------


def measure_page_load(page: Page) -> PerformanceMetrics:
    """Navigation and first paint timings of the current document."""
    timing = page.evaluate(_NAVIGATION_TIMING_SCRIPT)
    return PerformanceMetrics(
        load_time=float(timing["load_time"]),
        dom_content_loaded=float(timing["dom_content_loaded"]),
        first_contentful_paint=float(timing["first_contentful_paint"]),
    )


def measure_core_web_vitals(page: Page, settle_ms: int = VITALS_SETTLE_MS) -> dict[str, float]:
    """
    Collect LCP, FID and CLS.

    The observers run for ``settle_ms`` before reporting, so this call
    blocks for at least that long.
    """
    vitals = page.evaluate(_CORE_WEB_VITALS_SCRIPT, settle_ms)
    return {name: float(value) for name, value in vitals.items()}


def measure_memory_usage(page: Page) -> int:
    """Used JS heap in bytes; 0 where the browser does not expose it."""
    return int(page.evaluate(_MEMORY_SCRIPT))


def collect_metrics(page: Page, settle_ms: int = VITALS_SETTLE_MS) -> PerformanceMetrics:
    """Page load timings, Web Vitals and memory in one record."""
    metrics = measure_page_load(page)
    vitals = measure_core_web_vitals(page, settle_ms)
    metrics.largest_contentful_paint = vitals["largest_contentful_paint"]
    metrics.first_input_delay = vitals["first_input_delay"]
    metrics.cumulative_layout_shift = vitals["cumulative_layout_shift"]
    metrics.memory_usage = measure_memory_usage(page)
    logger.info("Performance metrics for %s: %s", page.url, metrics)
    return metrics


# -----------------------------------------------------------------------------
# Budgets
# -----------------------------------------------------------------------------


def load_budget(path: Path = DEFAULT_BUDGET_PATH) -> PerformanceBudget:
    """
    Read a performance budget from a YAML file.

    Args:
        path: YAML file defining ``load_time_ms``, ``first_contentful_paint_ms``,
            ``largest_contentful_paint_ms``, ``first_input_delay_ms`` and
            ``cumulative_layout_shift``.

    Raises:
        ValueError: If any key is missing or non-numeric.
    """
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    try:
        return PerformanceBudget(
            load_time=float(data["load_time_ms"]),
            first_contentful_paint=float(data["first_contentful_paint_ms"]),
            largest_contentful_paint=float(data["largest_contentful_paint_ms"]),
            first_input_delay=float(data["first_input_delay_ms"]),
            cumulative_layout_shift=float(data["cumulative_layout_shift"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(
            f"Budget file {path} must define numeric load_time_ms, "
            "first_contentful_paint_ms, largest_contentful_paint_ms, "
            "first_input_delay_ms and cumulative_layout_shift"
        ) from exc


def validate_performance_metrics(
    metrics: PerformanceMetrics, budget: PerformanceBudget | None = None
) -> PerformanceCheck:
    """
    Compare metrics with a budget.

    Returns:
        PerformanceCheck listing one issue per exceeded budget.
    """
    budget = budget or PerformanceBudget()
    checks = (
        ("Load time", metrics.load_time, budget.load_time, "ms"),
        ("FCP", metrics.first_contentful_paint, budget.first_contentful_paint, "ms"),
        ("LCP", metrics.largest_contentful_paint, budget.largest_contentful_paint, "ms"),
        ("FID", metrics.first_input_delay, budget.first_input_delay, "ms"),
        ("CLS", metrics.cumulative_layout_shift, budget.cumulative_layout_shift, ""),
    )

    issues = [
        f"{label} {value:g}{unit} exceeds threshold {limit:g}{unit}"
        for label, value, limit, unit in checks
        if value > limit
    ]
    return PerformanceCheck(passed=not issues, issues=issues)
