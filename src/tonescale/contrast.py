"""WCAG contrast and accessibility evaluation for tonescale.

This module implements the Web Content Accessibility Guidelines (WCAG) 2.x
relative luminance and contrast ratio formulas and turns them into an
``AccessibilityReport`` for a single color: how well black text and white
text read on top of it.

Standards Compliance:
    - WCAG 2.x Level AA: 4.5:1 for normal text, 3.0:1 for large text
    - WCAG 2.x Level AAA: 7.0:1 / 4.5:1 (reported, never used as a gate)
    - sRGB linearization with the WCAG 0.03928 threshold

Example:
    >>> from tonescale.contrast import evaluate, AccessibilityMode
    >>> report = evaluate((55, 145, 198))
    >>> report.black_ratio, report.white_ratio
    (6.03, 3.48)
    >>> report.passes(AccessibilityMode.FULL)
    False
"""

import enum
from dataclasses import dataclass
from typing import Any

import numpy as np

from .color_utils import hsl_array_to_rgb
from .constants import (
    BLACK_HEX,
    BLACK_RGB,
    CONTRAST_FLARE,
    LUMINANCE_WEIGHTS,
    SRGB_DIVISOR,
    SRGB_GAMMA,
    SRGB_OFFSET,
    SRGB_SLOPE,
    WCAG_AA_LARGE,
    WCAG_AA_NORMAL,
    WCAG_AAA_LARGE,
    WCAG_AAA_NORMAL,
    WCAG_LINEAR_THRESHOLD,
    WHITE_HEX,
    WHITE_RGB,
)

__all__ = [
    "AccessibilityMode",
    "AccessibilityReport",
    "BatchEvaluation",
    "relative_luminance",
    "contrast_ratio",
    "evaluate",
    "evaluate_batch",
    "is_accessible",
    "accessibility_score",
    "accessibility_level",
]


class AccessibilityMode(enum.Enum):
    """Which text colors a background must support to count as accessible."""

    FULL = "full"
    BLACK_TEXT_ONLY = "black-only"
    WHITE_TEXT_ONLY = "white-only"

    @property
    def label(self) -> str:
        return {
            AccessibilityMode.FULL: "All 4 Criteria",
            AccessibilityMode.BLACK_TEXT_ONLY: "Black Text",
            AccessibilityMode.WHITE_TEXT_ONLY: "White Text",
        }[self]


def _round_ratio(ratio: Any) -> Any:
    # Two decimals, halves up, for scalars and arrays alike.
    return np.floor(np.asarray(ratio, dtype=float) * 100.0 + 0.5) / 100.0


def relative_luminance(rgb: Any) -> Any:
    """Compute the relative luminance of an 8-bit sRGB color.

    Each channel is scaled to [0, 1] and linearized:

        c <= 0.03928: c / 12.92
        c >  0.03928: ((c + 0.055) / 1.055) ** 2.4

    and the linear channels are weighted 0.2126 R + 0.7152 G + 0.0722 B.

    Args:
        rgb: One color as three channels in [0, 255], or an ``(n, 3)`` array
            of colors.

    Returns:
        A float in [0.0, 1.0] for a single color, an array of shape ``(n,)``
        for a batch.

    Examples:
        >>> relative_luminance((0, 0, 0))
        0.0
        >>> relative_luminance((255, 255, 255))
        1.0
    """
    channels = np.clip(np.asarray(rgb, dtype=float), 0.0, 255.0) / 255.0
    linear = np.where(
        channels <= WCAG_LINEAR_THRESHOLD,
        channels / SRGB_SLOPE,
        ((channels + SRGB_OFFSET) / SRGB_DIVISOR) ** SRGB_GAMMA,
    )
    luminance = linear @ np.array(LUMINANCE_WEIGHTS)
    if np.ndim(luminance) == 0:
        return float(luminance)
    return luminance


def _ratio_from_luminance(l1: Any, l2: Any) -> Any:
    light = np.maximum(l1, l2)
    dark = np.minimum(l1, l2)
    return (light + CONTRAST_FLARE) / (dark + CONTRAST_FLARE)


def contrast_ratio(rgb_a: Any, rgb_b: Any) -> float:
    """Calculate the WCAG contrast ratio between two 8-bit RGB colors.

    The ratio is ``(L_lighter + 0.05) / (L_darker + 0.05)``. It does not
    depend on argument order and always lies in [1.0, 21.0].

    Examples:
        >>> contrast_ratio((0, 0, 0), (255, 255, 255))
        21.0
        >>> contrast_ratio((120, 40, 200), (120, 40, 200))
        1.0
    """
    ratio = _ratio_from_luminance(relative_luminance(rgb_a), relative_luminance(rgb_b))
    return float(ratio)


@dataclass(frozen=True)
class AccessibilityReport:
    """Contrast of one color against black text and white text."""

    black_ratio: float
    white_ratio: float
    black_passes_normal: bool
    black_passes_large: bool
    white_passes_normal: bool
    white_passes_large: bool
    preferred_text: str

    @property
    def black_level(self) -> str:
        return accessibility_level(self.black_ratio)

    @property
    def white_level(self) -> str:
        return accessibility_level(self.white_ratio)

    @property
    def black_passes_aaa(self) -> bool:
        return self.black_ratio >= WCAG_AAA_NORMAL

    @property
    def white_passes_aaa(self) -> bool:
        return self.white_ratio >= WCAG_AAA_NORMAL

    @property
    def black_passes_aaa_large(self) -> bool:
        return self.black_ratio >= WCAG_AAA_LARGE

    @property
    def white_passes_aaa_large(self) -> bool:
        return self.white_ratio >= WCAG_AAA_LARGE

    @property
    def passes_aa_normal(self) -> bool:
        """At least one of black or white text reads at normal size."""
        return self.black_passes_normal or self.white_passes_normal

    def passes(self, mode: AccessibilityMode) -> bool:
        return is_accessible(self, mode)

    def score(self, mode: AccessibilityMode) -> float:
        return accessibility_score(self, mode)


def evaluate(rgb: Any) -> AccessibilityReport:
    """Build the accessibility report of a background color.

    Ratios are rounded to two decimals and the pass flags are taken on the
    rounded ratios, so a color reported as 4.50:1 always passes AA.
    """
    luminance = relative_luminance(rgb)
    black_ratio = float(_round_ratio(
        _ratio_from_luminance(luminance, relative_luminance(BLACK_RGB))
    ))
    white_ratio = float(_round_ratio(
        _ratio_from_luminance(luminance, relative_luminance(WHITE_RGB))
    ))

    return AccessibilityReport(
        black_ratio=black_ratio,
        white_ratio=white_ratio,
        black_passes_normal=black_ratio >= WCAG_AA_NORMAL,
        black_passes_large=black_ratio >= WCAG_AA_LARGE,
        white_passes_normal=white_ratio >= WCAG_AA_NORMAL,
        white_passes_large=white_ratio >= WCAG_AA_LARGE,
        preferred_text=BLACK_HEX if black_ratio > white_ratio else WHITE_HEX,
    )


def is_accessible(report: AccessibilityReport, mode: AccessibilityMode) -> bool:
    black = report.black_passes_normal and report.black_passes_large
    white = report.white_passes_normal and report.white_passes_large

    if mode is AccessibilityMode.BLACK_TEXT_ONLY:
        return black
    if mode is AccessibilityMode.WHITE_TEXT_ONLY:
        return white
    return black and white


def accessibility_score(report: AccessibilityReport, mode: AccessibilityMode) -> float:
    """Ratio that decides whether ``report`` passes under ``mode``.

    Full mode is satisfied by whichever text color contrasts better, so the
    stronger of the two ratios is the one that matters.
    """
    if mode is AccessibilityMode.BLACK_TEXT_ONLY:
        return report.black_ratio
    if mode is AccessibilityMode.WHITE_TEXT_ONLY:
        return report.white_ratio
    return max(report.black_ratio, report.white_ratio)


def accessibility_level(ratio: float) -> str:
    """Classify a ratio as 'AAA', 'AA', 'AA Large' or 'Fail'."""
    if ratio >= WCAG_AAA_NORMAL:
        return "AAA"
    if ratio >= WCAG_AA_NORMAL:
        return "AA"
    if ratio >= WCAG_AA_LARGE:
        return "AA Large"
    return "Fail"


@dataclass(frozen=True)
class BatchEvaluation:
    """Rounded black/white ratios for an ``(n, 3)`` batch of HSL candidates."""

    black_ratios: np.ndarray
    white_ratios: np.ndarray

    def passes(self, mode: AccessibilityMode) -> np.ndarray:
        # The large-text threshold is implied by the normal one.
        black = (self.black_ratios >= WCAG_AA_NORMAL) & (self.black_ratios >= WCAG_AA_LARGE)
        white = (self.white_ratios >= WCAG_AA_NORMAL) & (self.white_ratios >= WCAG_AA_LARGE)

        if mode is AccessibilityMode.BLACK_TEXT_ONLY:
            return black
        if mode is AccessibilityMode.WHITE_TEXT_ONLY:
            return white
        return black & white

    def scores(self, mode: AccessibilityMode) -> np.ndarray:
        if mode is AccessibilityMode.BLACK_TEXT_ONLY:
            return self.black_ratios
        if mode is AccessibilityMode.WHITE_TEXT_ONLY:
            return self.white_ratios
        return np.maximum(self.black_ratios, self.white_ratios)


def evaluate_batch(hsl: Any) -> BatchEvaluation:
    """Evaluate many HSL candidates at once with the same rules as :func:`evaluate`."""
    luminance = relative_luminance(hsl_array_to_rgb(hsl))
    black_ratios = _round_ratio(_ratio_from_luminance(luminance, relative_luminance(BLACK_RGB)))
    white_ratios = _round_ratio(_ratio_from_luminance(luminance, relative_luminance(WHITE_RGB)))
    return BatchEvaluation(black_ratios=black_ratios, white_ratios=white_ratios)

