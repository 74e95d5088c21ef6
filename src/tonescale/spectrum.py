"""Spectrum-aware accessible color search.

The hue circle is divided into eight spectra (red, orange, yellow, green,
cyan, blue, purple, magenta). Each spectrum holds a few named sub-families
with a preferred saturation band, and a strategy per render mode giving the
lightness band accessible colors of that spectrum tend to live in, the
saturation band to search and how far the hue may drift.

Searching inside those bounds keeps a result "in family": a crimson stays a
crimson rather than sliding toward orange. The price is that such a narrow
search can come up empty, in which case the general search takes over.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from .color_utils import HSL, clamp_hsl, hsl_to_rgb, normalize_hue
from .constants import SPECTRUM_GOOD_ENOUGH, SPECTRUM_HUE_STEP, SPECTRUM_SATURATION_STEP
from .contrast import AccessibilityMode, evaluate, evaluate_batch
from .search import DEFAULT_WEIGHTS, RenderMode, find_accessible, hsl_distance

__all__ = [
    "HueFamily",
    "ModeStrategy",
    "Spectrum",
    "SpectrumMatch",
    "SPECTRUM_DEFINITION",
    "is_hue_in_range",
    "identify_spectrum",
    "constrained_hue_range",
    "constrained_saturation_range",
    "find_spectrum_accessible",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HueFamily:
    name: str
    hue_range: tuple[float, float]
    preferred_saturation: tuple[float, float]


@dataclass(frozen=True)
class ModeStrategy:
    preferred_lightness: tuple[int, int]
    saturation_range: tuple[float, float]
    hue_variation: int


@dataclass(frozen=True)
class Spectrum:
    name: str
    hue_range: tuple[float, float]
    families: tuple[HueFamily, ...]
    strategies: Mapping[RenderMode, ModeStrategy]


def _strategies(light: ModeStrategy, dark: ModeStrategy) -> Mapping[RenderMode, ModeStrategy]:
    return MappingProxyType({RenderMode.LIGHT: light, RenderMode.DARK: dark})


SPECTRUM_DEFINITION: tuple[Spectrum, ...] = (
    Spectrum(
        "red",
        (345, 15),
        (
            HueFamily("crimson", (345, 5), (70, 85)),
            HueFamily("scarlet", (0, 10), (80, 95)),
            HueFamily("cherry", (5, 15), (60, 80)),
        ),
        _strategies(ModeStrategy((25, 40), (60, 90), 8), ModeStrategy((65, 80), (50, 80), 8)),
    ),
    Spectrum(
        "orange",
        (15, 45),
        (
            HueFamily("amber", (35, 45), (70, 90)),
            HueFamily("tangerine", (25, 35), (80, 95)),
            HueFamily("coral", (15, 25), (60, 85)),
        ),
        _strategies(ModeStrategy((30, 45), (65, 90), 6), ModeStrategy((60, 75), (60, 85), 6)),
    ),
    Spectrum(
        "yellow",
        (45, 75),
        (
            HueFamily("gold", (45, 55), (70, 90)),
            HueFamily("lemon", (55, 65), (80, 95)),
            HueFamily("cream", (65, 75), (40, 70)),
        ),
        # Yellow has to be quite dark before black and white both read on it.
        _strategies(ModeStrategy((25, 35), (70, 95), 5), ModeStrategy((70, 85), (60, 90), 5)),
    ),
    Spectrum(
        "green",
        (75, 165),
        (
            HueFamily("lime", (75, 95), (70, 90)),
            HueFamily("forest", (95, 125), (60, 85)),
            HueFamily("emerald", (125, 145), (70, 90)),
            HueFamily("mint", (145, 165), (50, 80)),
        ),
        _strategies(ModeStrategy((25, 40), (60, 85), 10), ModeStrategy((65, 80), (55, 80), 10)),
    ),
    Spectrum(
        "cyan",
        (165, 195),
        (
            HueFamily("turquoise", (165, 175), (60, 85)),
            HueFamily("aqua", (175, 185), (70, 90)),
            HueFamily("teal", (185, 195), (60, 80)),
        ),
        _strategies(ModeStrategy((25, 40), (60, 85), 8), ModeStrategy((65, 80), (55, 80), 8)),
    ),
    Spectrum(
        "blue",
        (195, 255),
        (
            HueFamily("sky", (195, 215), (60, 85)),
            HueFamily("azure", (215, 235), (70, 90)),
            HueFamily("navy", (235, 255), (60, 90)),
        ),
        _strategies(ModeStrategy((25, 40), (65, 90), 10), ModeStrategy((65, 80), (60, 85), 10)),
    ),
    Spectrum(
        "purple",
        (255, 285),
        (
            HueFamily("violet", (255, 265), (60, 85)),
            HueFamily("lavender", (265, 275), (50, 75)),
            HueFamily("plum", (275, 285), (55, 80)),
        ),
        _strategies(ModeStrategy((25, 40), (60, 85), 8), ModeStrategy((65, 80), (55, 80), 8)),
    ),
    Spectrum(
        "magenta",
        (285, 345),
        (
            HueFamily("fuchsia", (285, 305), (70, 90)),
            HueFamily("rose", (305, 325), (60, 85)),
            HueFamily("pink", (325, 345), (50, 80)),
        ),
        _strategies(ModeStrategy((25, 40), (60, 85), 8), ModeStrategy((65, 80), (55, 80), 8)),
    ),
)


@dataclass(frozen=True)
class SpectrumMatch:
    spectrum: Spectrum
    family: HueFamily | None

    @property
    def family_name(self) -> str:
        return self.family.name if self.family else "generic"


def is_hue_in_range(hue: float, hue_range: Sequence[float]) -> bool:
    """Inclusive range check; a range whose start exceeds its end wraps past 360."""
    low, high = hue_range
    if low > high:
        return hue >= low or hue <= high
    return low <= hue <= high


def identify_spectrum(
    hsl: Sequence[float], definition: Sequence[Spectrum] = SPECTRUM_DEFINITION
) -> SpectrumMatch | None:
    """Find the spectrum and the most specific sub-family containing the hue."""
    hue = normalize_hue(hsl[0])
    for spectrum in definition:
        if is_hue_in_range(hue, spectrum.hue_range):
            family = next(
                (f for f in spectrum.families if is_hue_in_range(hue, f.hue_range)), None
            )
            return SpectrumMatch(spectrum, family)
    return None


def constrained_hue_range(hue: float, spectrum_range: Sequence[float], variation: int) -> list[float]:
    hues = [hue]
    for offset in range(SPECTRUM_HUE_STEP, variation + 1, SPECTRUM_HUE_STEP):
        for shifted in (normalize_hue(hue - offset), normalize_hue(hue + offset)):
            if is_hue_in_range(shifted, spectrum_range):
                hues.append(shifted)
    return hues


def constrained_saturation_range(
    saturation: float,
    strategy_range: Sequence[float],
    family_preference: Sequence[float] | None = None,
) -> list[float]:
    """Saturations inside both the strategy band and the family preference."""
    strategy_low, strategy_high = strategy_range
    preferred_low, preferred_high = family_preference or strategy_range
    low = max(strategy_low, preferred_low)
    high = min(strategy_high, preferred_high)

    values: list[float] = []
    if low <= saturation <= high:
        values.append(saturation)
    value = low
    while value <= high:
        if value not in values:
            values.append(value)
        value += SPECTRUM_SATURATION_STEP

    return sorted(values, key=lambda v: abs(v - saturation))


def _spectrum_candidates(original: HSL, match: SpectrumMatch, render_mode: RenderMode) -> list[HSL]:
    strategy = match.spectrum.strategies[render_mode]
    hues = constrained_hue_range(original.h, match.spectrum.hue_range, strategy.hue_variation)
    saturations = constrained_saturation_range(
        original.s,
        strategy.saturation_range,
        match.family.preferred_saturation if match.family else None,
    )
    low, high = strategy.preferred_lightness
    return [
        HSL(h, s, lightness)
        for h in hues
        for lightness in range(low, high + 1)
        for s in saturations
    ]


def find_spectrum_accessible(
    base_hsl: Sequence[float],
    render_mode: RenderMode = RenderMode.LIGHT,
    accessibility_mode: AccessibilityMode = AccessibilityMode.FULL,
    definition: Sequence[Spectrum] = SPECTRUM_DEFINITION,
) -> HSL | None:
    """Find an accessible color that stays inside the original's spectrum.

    A base that already passes is returned as is. Candidates are walked in
    search order and the first passing candidate closer than 15 ends the
    walk. When no candidate passes, the general
    :func:`~tonescale.search.find_accessible` search is used instead.
    """
    original = clamp_hsl(base_hsl)
    if evaluate(hsl_to_rgb(original)).passes(accessibility_mode):
        return original

    match = identify_spectrum(original, definition)

    if match is not None:
        candidates = _spectrum_candidates(original, match, render_mode)

        best: HSL | None = None
        best_distance = float("inf")
        # A narrow strategy can leave nothing to evaluate.
        if candidates:
            batch = evaluate_batch(np.asarray(candidates, dtype=float))
            passes = batch.passes(accessibility_mode)
            distances = hsl_distance(original, candidates, DEFAULT_WEIGHTS)
            for candidate, passed, distance in zip(candidates, passes, distances):
                if passed and distance < best_distance:
                    best, best_distance = candidate, float(distance)
                    if best_distance < SPECTRUM_GOOD_ENOUGH:
                        break

        if best is not None:
            logger.debug(
                "Spectrum %s/%s: picked %s at distance %.2f",
                match.spectrum.name, match.family_name, tuple(best), best_distance,
            )
            return clamp_hsl(best)

        logger.debug(
            "Spectrum %s has no accessible candidate, deferring to the general search",
            match.spectrum.name,
        )
    else:
        logger.debug("Hue %s matches no spectrum, deferring to the general search", original.h)

    return find_accessible(original, render_mode, accessibility_mode)
