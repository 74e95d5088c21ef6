"""End-to-end palette pipeline.

``build_palette`` runs the whole flow for one seed color:

1. parse and clamp the seed,
2. generate the light scale,
3. when the base level fails the accessibility mode, search for accessible
   light and dark bases and generate a scale for each,
4. mirror the (accessible, if any) light scale into a dark scale,
5. score the perceptual spacing of the resulting scales.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .color_utils import HSL, clamp_hsl, parse_color, rgb_to_hsl
from .contrast import AccessibilityMode
from .dark_mode import build_dark_scale, mirror
from .quality import QualityReport, scale_quality
from .scale import DEFAULT_CONFIGURATION, Scale, generate
from .search import RenderMode, find_accessible
from .spectrum import find_spectrum_accessible

__all__ = ["Palette", "build_palette", "resolve_base"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    """Every scale derived from one seed color."""

    base: HSL
    accessibility_mode: AccessibilityMode
    light: Scale
    dark: Scale
    base_passes: bool
    accessible_light_base: HSL | None = None
    accessible_dark_base: HSL | None = None
    accessible_light: Scale | None = None
    accessible_dark: Scale | None = None
    light_quality: QualityReport | None = None
    dark_quality: QualityReport | None = None

    @property
    def primary(self) -> Scale:
        """The scale to use in light mode: the accessible one when it exists."""
        return self.accessible_light if self.accessible_light is not None else self.light


def resolve_base(color: str | Sequence[float]) -> HSL:
    """Turn a color string, or an HSL triple, into a clamped HSL base.

    Strings keep full HSL precision so the base swatch renders as the exact
    input color.
    """
    if isinstance(color, str):
        return rgb_to_hsl(parse_color(color), precise=True)
    return clamp_hsl(color)


def build_palette(
    color: str | Sequence[float],
    configuration: Any = DEFAULT_CONFIGURATION,
    accessibility_mode: AccessibilityMode = AccessibilityMode.FULL,
    spectrum_aware: bool = False,
) -> Palette:
    """Build the light, accessible and dark scales for ``color``.

    Args:
        color: A color string accepted by :func:`~tonescale.color_utils.parse_color`
            or an HSL triple.
        configuration: A configuration key or a ``LevelConfiguration``.
        accessibility_mode: Which text colors the base must support.
        spectrum_aware: Keep accessible alternatives inside the seed's hue
            family when possible.

    Raises:
        InvalidFormat: If ``color`` cannot be parsed.
        UnknownConfiguration: If ``configuration`` is not recognized.
    """
    base = resolve_base(color)
    light = generate(base, configuration)
    base_passes = light.base.accessibility.passes(accessibility_mode)

    finder = find_spectrum_accessible if spectrum_aware else find_accessible
    accessible_light_base = accessible_dark_base = None
    accessible_light = accessible_dark = None

    if not base_passes:
        logger.debug(
            "Base %s fails %s accessibility, searching for alternatives",
            tuple(base), accessibility_mode.value,
        )
        accessible_light_base = finder(base, RenderMode.LIGHT, accessibility_mode)
        accessible_dark_base = finder(base, RenderMode.DARK, accessibility_mode)

        if accessible_light_base is not None:
            accessible_light = generate(accessible_light_base, configuration)
        if accessible_dark_base is not None:
            accessible_dark = generate(accessible_dark_base, configuration)

    source = accessible_light if accessible_light is not None else light
    dark_base = accessible_light_base if accessible_light_base is not None else base
    dark = build_dark_scale(source, mirror(source), dark_base)

    return Palette(
        base=base,
        accessibility_mode=accessibility_mode,
        light=light,
        dark=dark,
        base_passes=base_passes,
        accessible_light_base=accessible_light_base,
        accessible_dark_base=accessible_dark_base,
        accessible_light=accessible_light,
        accessible_dark=accessible_dark,
        light_quality=scale_quality(source),
        dark_quality=scale_quality(dark),
    )
