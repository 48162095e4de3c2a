"""
Screenshot-based visual regression checks.

A comparison takes a PNG of the page (or one element), diffs it against
a stored baseline with Pillow, and fails when the share of changed pixels
exceeds the threshold. The first run for a name has nothing to compare
against: the screenshot is stored as the new baseline and the check
passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageChops
from playwright.sync_api import Locator, Page

from config import Config
from shared.test_data import VISUAL_THRESHOLDS

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
BASELINE_DIR = PROJECT_ROOT / "tests" / "e2e" / "visual_baselines"
DIFF_DIR = Config.REPORTS_DIR / "visual-diffs"

# Per-channel difference ignored as rendering noise
PIXEL_TOLERANCE = 10
HIGHLIGHT_COLOR = (255, 0, 0)


@dataclass(frozen=True)
class VisualComparisonResult:
    passed: bool
    diff_percentage: float
    threshold: float
    diff_image_path: str | None = None
    baseline_created: bool = False
    error: str | None = None


class VisualComparator:
    """
    Compare screenshots with named baselines.

    Attributes:
        baseline_dir: Where ``<name>.png`` baselines live.
        diff_dir: Where highlighted diff images are written on failure.
        threshold: Fraction (0-1) of pixels allowed to differ.
    """

    def __init__(
        self,
        baseline_dir: Path = BASELINE_DIR,
        diff_dir: Path = DIFF_DIR,
        threshold: float = VISUAL_THRESHOLDS["DEFAULT"],
    ):
        if not 0 <= threshold <= 1:
            raise ValueError("threshold must be between 0 and 1")
        self.baseline_dir = Path(baseline_dir)
        self.diff_dir = Path(diff_dir)
        self.threshold = threshold

    def compare_page(self, page: Page, name: str, full_page: bool = True) -> VisualComparisonResult:
        """Screenshot ``page`` and compare it with the ``name`` baseline."""
        return self._compare(name, page.screenshot(full_page=full_page))

    def compare_locator(self, locator: Locator, name: str) -> VisualComparisonResult:
        """Screenshot a single element and compare it with the ``name`` baseline."""
        return self._compare(name, locator.screenshot())

    def _compare(self, name: str, current: bytes) -> VisualComparisonResult:
        baseline_path = self.baseline_dir / f"{name}.png"
        if not baseline_path.exists():
            self.baseline_dir.mkdir(parents=True, exist_ok=True)
            baseline_path.write_bytes(current)
            logger.info("Recorded new visual baseline %s", baseline_path)
            return VisualComparisonResult(
                passed=True,
                diff_percentage=0.0,
                threshold=self.threshold,
                baseline_created=True,
            )

        result = self.compare_images(baseline_path.read_bytes(), current, name=name)
        logger.info(
            "Visual check %s: %.2f%% changed (threshold %.2f%%)",
            name,
            result.diff_percentage,
            self.threshold * 100,
        )
        return result

    def compare_images(
        self, baseline: bytes, current: bytes, name: str = "comparison"
    ) -> VisualComparisonResult:
        """
        Diff two PNG images.

        Args:
            baseline: Baseline image bytes.
            current: Current image bytes.
            name: Used to name the diff image written on failure.

        Returns:
            VisualComparisonResult. Images of different sizes fail with an
            ``error`` instead of being compared.
        """
        baseline_img = Image.open(BytesIO(baseline)).convert("RGB")
        current_img = Image.open(BytesIO(current)).convert("RGB")

        if baseline_img.size != current_img.size:
            return VisualComparisonResult(
                passed=False,
                diff_percentage=100.0,
                threshold=self.threshold,
                error=(
                    f"Image dimensions do not match: "
                    f"baseline={baseline_img.size}, current={current_img.size}"
                ),
            )

        # Largest per-channel difference, so a change in one colour counts
        red, green, blue = ImageChops.difference(baseline_img, current_img).split()
        mask = ImageChops.lighter(ImageChops.lighter(red, green), blue).point(
            lambda value: 255 if value > PIXEL_TOLERANCE else 0
        )
        width, height = current_img.size
        changed = mask.histogram()[255]
        ratio = changed / (width * height) if width and height else 0.0
        passed = ratio <= self.threshold

        diff_image_path = None
        if not passed:
            diff_image_path = self._write_diff(name, current_img, mask)

        return VisualComparisonResult(
            passed=passed,
            diff_percentage=round(ratio * 100, 4),
            threshold=self.threshold,
            diff_image_path=diff_image_path,
        )

    def _write_diff(self, name: str, current_img: Image.Image, mask: Image.Image) -> str:
        """Save ``current_img`` with changed pixels painted red."""
        self.diff_dir.mkdir(parents=True, exist_ok=True)
        highlight = Image.new("RGB", current_img.size, HIGHLIGHT_COLOR)
        path = self.diff_dir / f"{name}-diff.png"
        Image.composite(highlight, current_img, mask).save(path, format="PNG")
        return str(path)

    def update_baseline(self, page: Page, name: str, full_page: bool = True) -> Path:
        """Overwrite the ``name`` baseline with the current page."""
        self.baseline_dir.mkdir(parents=True, exist_ok=True)
        path = self.baseline_dir / f"{name}.png"
        path.write_bytes(page.screenshot(full_page=full_page))
        logger.info("Updated visual baseline %s", path)
        return path
