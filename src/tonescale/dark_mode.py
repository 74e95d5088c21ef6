"""Dark-mode counterpart of a light scale.

The dark scale keeps the light scale's level names but swaps their values
across the base level: in a seven-level ramp the dark 100 shows what the
light 700 shows, the dark 200 the light 600, and so on. The base level
takes the dark base color directly.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .color_utils import HSL, clamp_hsl, is_neutral
from .constants import DARK_BASE_SATURATION_BOOST, MIN_DARK_LIGHTNESS_STEP
from .scale import Scale, level_hsl, make_swatch

__all__ = [
    "mirror_levels",
    "mirror",
    "build_dark_scale",
    "optimal_dark_base",
    "DarkScaleValidation",
    "validate_dark_scale",
]

logger = logging.getLogger(__name__)


def mirror_levels(levels: Iterable[int], base_level: int) -> dict[int, int]:
    """Map every level to the level at the mirrored index across ``base_level``.

    Indexes that fall outside the list are clamped to its ends. When
    ``base_level`` is not one of ``levels`` the whole list is reversed.
    """
    ordered = sorted(levels)
    if base_level not in ordered:
        return dict(zip(ordered, reversed(ordered)))

    center = ordered.index(base_level)
    last = len(ordered) - 1
    mapping = {}
    for index, level in enumerate(ordered):
        target = max(0, min(last, 2 * center - index))
        mapping[level] = ordered[target]
    return mapping


def mirror(light_scale: Scale, base_level: int | None = None) -> dict[int, int]:
    if base_level is None:
        base_level = light_scale.base_level
    return mirror_levels(light_scale.levels, base_level)


def build_dark_scale(
    light_scale: Scale, mapping: dict[int, int], dark_base: Sequence[float]
) -> Scale:
    """Build the dark scale from ``light_scale`` and a level mapping.

    Every non-base level copies the light swatch found at its mapped level;
    when the light scale has no such level, the level is generated from
    ``dark_base`` instead.
    """
    dark_base = clamp_hsl(dark_base)
    base_level = light_scale.base_level
    swatches = []

    for light in light_scale:
        source = mapping.get(light.level, light.level)
        if light.level == base_level:
            hsl = dark_base
        else:
            mirrored = light_scale.swatch(source)
            if mirrored is not None:
                hsl = mirrored.hsl
            else:
                logger.debug(
                    "No light swatch at level %d, generating it from the dark base", source
                )
                hsl = level_hsl(dark_base, source, base_level)
        swatches.append(
            make_swatch(light.level, hsl, is_base=light.level == base_level, source_level=source)
        )

    return Scale(
        swatches=tuple(swatches),
        base_level=base_level,
        configuration=light_scale.configuration,
    )


def optimal_dark_base(light_base: Sequence[float]) -> HSL:
    """Suggest a base color for dark mode from a light-mode base."""
    h, s, lightness = clamp_hsl(light_base)

    dark_s = s if is_neutral((h, s, lightness)) else min(100, s + DARK_BASE_SATURATION_BOOST)

    if lightness > 70:
        dark_l = max(35, lightness - 35)
    elif lightness < 30:
        dark_l = min(65, lightness + 35)
    elif lightness > 50:
        dark_l = max(40, lightness - 15)
    else:
        dark_l = min(60, lightness + 15)

    return clamp_hsl((h, dark_s, dark_l))


@dataclass(frozen=True)
class DarkScaleValidation:
    is_valid: bool
    warnings: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


def validate_dark_scale(dark_scale: Scale, light_scale: Scale) -> DarkScaleValidation:
    warnings: list[str] = []
    suggestions: list[str] = []
    base_level = light_scale.base_level

    # In dark mode the levels below the base hold the darker colors.
    low = [s.hsl.l for s in dark_scale if s.level < base_level]
    high = [s.hsl.l for s in dark_scale if s.level > base_level]
    if low and high and sum(low) / len(low) >= sum(high) / len(high):
        warnings.append("Dark mode levels are not reversed relative to the light scale")

    unreadable = [s for s in dark_scale if not s.accessibility.passes_aa_normal]
    if unreadable:
        warnings.append(f"{len(unreadable)} colors may have accessibility issues in dark mode")
        suggestions.append("Consider adjusting lightness values for better contrast")

    swatches = list(dark_scale)
    for previous, current in zip(swatches, swatches[1:]):
        if abs(current.hsl.l - previous.hsl.l) < MIN_DARK_LIGHTNESS_STEP:
            warnings.append(
                f"Low contrast between levels {previous.level} and {current.level}"
            )

    return DarkScaleValidation(
        is_valid=not warnings, warnings=tuple(warnings), suggestions=tuple(suggestions)
    )
