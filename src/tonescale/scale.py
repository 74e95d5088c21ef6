"""Tonal scale generation.

A scale is an ordered ramp of swatches derived from one base color. The base
color sits at the configuration's base level unchanged; lighter levels are
interpolated toward a light boundary and darker levels toward a dark one.

Two branches exist. Neutral colors (saturation below 15) interpolate their
lightness between fixed anchors and keep their saturation. Every other color
derives its boundaries from its own lightness and saturation, interpolates
both, and applies a small per-level adjustment table on top.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple

from .color_utils import HSL, RGB, clamp_hsl, hsl_to_rgb, is_neutral, rgb_to_hex, round_half_up
from .constants import (
    CANONICAL_BASE_LEVEL,
    DARK_EXTREME_LEVEL,
    DARK_HUE_SHIFT,
    DARKEST_CANONICAL_LEVEL,
    LEVEL_ADJUSTMENTS,
    LIGHT_EXTREME_LEVEL,
    LIGHT_HUE_SHIFT,
    LIGHTEST_CANONICAL_LEVEL,
    LOW_SATURATION_BASE_S,
    MAX_SATURATION_JUMP,
    NEUTRAL_DARKEST_L,
    NEUTRAL_EXTREME_SATURATION_DROP,
    NEUTRAL_LIGHTEST_L,
    VERY_DARK_BASE_L,
    VERY_LIGHT_BASE_L,
    VERY_SATURATED_BASE_S,
)
from .contrast import AccessibilityReport, evaluate
from .exceptions import UnknownConfiguration

__all__ = [
    "LevelConfiguration",
    "SCALE_CONFIGURATIONS",
    "DEFAULT_CONFIGURATION",
    "Boundaries",
    "Swatch",
    "Scale",
    "resolve_configuration",
    "dynamic_boundaries",
    "level_hsl",
    "make_swatch",
    "generate",
    "validate_scale",
    "validate_scale_accessibility",
]

DEFAULT_CONFIGURATION = "current"


@dataclass(frozen=True)
class LevelConfiguration:
    """A named, ordered set of distinct scale levels."""

    key: str
    name: str
    levels: tuple[int, ...]
    description: str = ""

    def __post_init__(self) -> None:
        levels = tuple(sorted(int(level) for level in self.levels))
        if not levels:
            raise ValueError(f"Configuration '{self.key}' has no levels")
        if len(set(levels)) != len(levels):
            raise ValueError(f"Configuration '{self.key}' has duplicate levels")
        object.__setattr__(self, "levels", levels)

    @property
    def base_level(self) -> int:
        """The level holding the input color: 400, or the level closest to it."""
        if CANONICAL_BASE_LEVEL in self.levels:
            return CANONICAL_BASE_LEVEL
        # Ascending order makes the lower level win a tie.
        return min(self.levels, key=lambda level: abs(level - CANONICAL_BASE_LEVEL))


SCALE_CONFIGURATIONS = MappingProxyType({
    "minimal": LevelConfiguration(
        "minimal", "Minimal (1 level)", (400,), "Just the base color"
    ),
    "simple": LevelConfiguration(
        "simple", "Simple (3 levels)", (300, 400, 600),
        "A light tint, the base color and a dark shade",
    ),
    "standard": LevelConfiguration(
        "standard", "Standard (5 levels)", (200, 300, 400, 500, 600),
        "Five evenly spaced levels around the base",
    ),
    "current": LevelConfiguration(
        "current", "Current (7 levels)", (100, 200, 300, 400, 500, 600, 700),
        "The default seven level ramp",
    ),
    "extended": LevelConfiguration(
        "extended", "Extended (9 levels)", (50, 100, 200, 300, 400, 500, 600, 700, 800),
        "The full ramp including the 50 and 800 extremes",
    ),
})


def resolve_configuration(config: Any) -> LevelConfiguration:
    """Look up a registered configuration key, or accept a configuration as is.

    Raises:
        UnknownConfiguration: If ``config`` is neither a registered key nor a
            :class:`LevelConfiguration`.
    """
    if isinstance(config, LevelConfiguration):
        return config
    if isinstance(config, str):
        try:
            return SCALE_CONFIGURATIONS[config]
        except KeyError:
            raise UnknownConfiguration(
                f"Unknown scale configuration: '{config}'. "
                f"Available: {', '.join(SCALE_CONFIGURATIONS)}"
            ) from None
    raise UnknownConfiguration(f"Unknown scale configuration: {config!r}")


class Boundaries(NamedTuple):
    lightest_l: float
    lightest_s: float
    darkest_l: float
    darkest_s: float
    light_hue_shift: float = LIGHT_HUE_SHIFT
    dark_hue_shift: float = DARK_HUE_SHIFT


def dynamic_boundaries(base_hsl: Sequence[float]) -> Boundaries:
    """Derive interpolation boundaries from the base lightness and saturation."""
    _, s, lightness = base_hsl

    lightest_l = min(94, lightness + 44)
    lightest_s = max(0, s - 1)
    darkest_l = max(24, lightness - 26)
    darkest_s = min(100, s + 28)

    if lightness > VERY_LIGHT_BASE_L:
        lightest_l = min(96, lightness + 16)
        darkest_l = max(20, lightness - 35)
    elif lightness < VERY_DARK_BASE_L:
        lightest_l = min(92, lightness + 55)
        darkest_l = max(15, lightness - 15)

    if s > VERY_SATURATED_BASE_S:
        lightest_s = max(0, s - 15)
        darkest_s = min(100, s + 10)
    elif s < LOW_SATURATION_BASE_S:
        lightest_s = max(0, s - 5)
        darkest_s = min(100, s + 35)

    return Boundaries(lightest_l, lightest_s, darkest_l, darkest_s)


def _interpolation_factor(level: int, base_level: int) -> float:
    if level < base_level:
        span = base_level - LIGHTEST_CANONICAL_LEVEL
        factor = (base_level - level) / span if span > 0 else 1.0
    else:
        span = DARKEST_CANONICAL_LEVEL - base_level
        factor = (level - base_level) / span if span > 0 else 1.0
    return max(0.0, min(1.0, factor))


def _neutral_level_hsl(base: HSL, level: int, base_level: int) -> HSL:
    h, s, lightness = base
    factor = _interpolation_factor(level, base_level)

    if level < base_level:
        target_l = lightness + (NEUTRAL_LIGHTEST_L - lightness) * factor
    else:
        target_l = lightness - (lightness - NEUTRAL_DARKEST_L) * factor
    target_l = max(NEUTRAL_DARKEST_L, min(NEUTRAL_LIGHTEST_L, target_l))

    target_s = s
    if level <= LIGHT_EXTREME_LEVEL or level >= DARK_EXTREME_LEVEL:
        target_s = max(0, s - NEUTRAL_EXTREME_SATURATION_DROP)

    return HSL(h, target_s, round_half_up(target_l))


def _chromatic_level_hsl(base: HSL, level: int, base_level: int) -> HSL:
    h, s, lightness = base
    bounds = dynamic_boundaries(base)
    factor = _interpolation_factor(level, base_level)

    if level < base_level:
        target_l = lightness + (bounds.lightest_l - lightness) * factor
        target_s = s + (bounds.lightest_s - s) * factor
        if level <= LIGHT_EXTREME_LEVEL:
            h = h + bounds.light_hue_shift
    else:
        target_l = lightness + (bounds.darkest_l - lightness) * factor
        target_s = s + (bounds.darkest_s - s) * factor
        if level >= DARK_EXTREME_LEVEL:
            h = h + bounds.dark_hue_shift

    delta_l, delta_s = LEVEL_ADJUSTMENTS.get(level, (0, 0))
    h, target_s, target_l = clamp_hsl((h, target_s + delta_s, target_l + delta_l))
    return HSL(h, round_half_up(target_s), round_half_up(target_l))


def level_hsl(
    base_hsl: Sequence[float], level: int, base_level: int = CANONICAL_BASE_LEVEL
) -> HSL:
    """Compute the HSL color of one level of the scale built on ``base_hsl``."""
    base = clamp_hsl(base_hsl)
    if level == base_level:
        return base
    if is_neutral(base):
        return _neutral_level_hsl(base, level, base_level)
    return _chromatic_level_hsl(base, level, base_level)


@dataclass(frozen=True)
class Swatch:
    """One level of a scale with all its color forms and its contrast report."""

    level: int
    hsl: HSL
    rgb: RGB
    hex: str
    accessibility: AccessibilityReport
    is_base: bool = False
    source_level: int | None = None


def make_swatch(
    level: int, hsl: Sequence[float], is_base: bool = False, source_level: int | None = None
) -> Swatch:
    hsl = HSL(*hsl)
    rgb = hsl_to_rgb(hsl)
    return Swatch(
        level=level,
        hsl=hsl,
        rgb=rgb,
        hex=rgb_to_hex(rgb),
        accessibility=evaluate(rgb),
        is_base=is_base,
        source_level=source_level,
    )


@dataclass(frozen=True)
class Scale:
    """An immutable ramp of swatches ordered by ascending level."""

    swatches: tuple[Swatch, ...]
    base_level: int
    configuration: str = DEFAULT_CONFIGURATION
    _by_level: dict[int, Swatch] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_level", {s.level: s for s in self.swatches})

    def __iter__(self) -> Iterator[Swatch]:
        return iter(self.swatches)

    def __len__(self) -> int:
        return len(self.swatches)

    def __getitem__(self, index: int) -> Swatch:
        return self.swatches[index]

    def __contains__(self, level: object) -> bool:
        return level in self._by_level

    @property
    def levels(self) -> tuple[int, ...]:
        return tuple(s.level for s in self.swatches)

    @property
    def base(self) -> Swatch:
        return self._by_level[self.base_level]

    def swatch(self, level: int) -> Swatch | None:
        return self._by_level.get(level)


def generate(base_hsl: Sequence[float], config: Any = DEFAULT_CONFIGURATION) -> Scale:
    """Generate the scale for ``base_hsl`` over the levels of ``config``.

    ``config`` is a key of :data:`SCALE_CONFIGURATIONS` or a
    :class:`LevelConfiguration`. The swatch at the base level always carries
    ``clamp_hsl(base_hsl)`` exactly.

    Raises:
        UnknownConfiguration: If ``config`` cannot be resolved.
    """
    configuration = resolve_configuration(config)
    base = clamp_hsl(base_hsl)
    base_level = configuration.base_level

    swatches = tuple(
        make_swatch(
            level,
            base if level == base_level else level_hsl(base, level, base_level),
            is_base=level == base_level,
        )
        for level in configuration.levels
    )
    return Scale(swatches=swatches, base_level=base_level, configuration=configuration.key)


@dataclass(frozen=True)
class AccessibilityValidation:
    overall_accessible: bool
    problematic: tuple[Swatch, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScaleValidation:
    is_valid: bool
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


def validate_scale_accessibility(scale: Scale) -> AccessibilityValidation:
    """Flag swatches on which neither black nor white text reads at normal size."""
    problematic = tuple(s for s in scale if not s.accessibility.passes_aa_normal)
    if not problematic:
        return AccessibilityValidation(overall_accessible=True)

    return AccessibilityValidation(
        overall_accessible=False,
        problematic=problematic,
        recommendations=(
            "Consider using the accessible alternative scale",
            "Adjust lightness values to improve contrast",
        ),
    )


def validate_scale(scale: Scale) -> ScaleValidation:
    """Check lightness progression, saturation jumps and accessibility."""
    warnings: list[str] = []
    suggestions: list[str] = []
    swatches = list(scale)

    for previous, current in zip(swatches, swatches[1:]):
        if current.hsl.l >= previous.hsl.l:
            warnings.append(
                f"Lightness not decreasing between levels {previous.level} and {current.level}"
            )

    if not validate_scale_accessibility(scale).overall_accessible:
        warnings.append("Some colors may not meet accessibility requirements")
        suggestions.append("Consider generating an accessible alternative")

    for previous, current in zip(swatches, swatches[1:]):
        if abs(current.hsl.s - previous.hsl.s) > MAX_SATURATION_JUMP:
            warnings.append(
                f"Large saturation jump between levels {previous.level} and {current.level}"
            )

    return ScaleValidation(
        is_valid=not warnings, warnings=tuple(warnings), suggestions=tuple(suggestions)
    )
