"""tonescale - accessible tonal color scales from a single base color"""

__version__ = "0.1.0"

from .color_utils import (
    HSL,
    RGB,
    Lab,
    LCh,
    clamp_hsl,
    format_color_output,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    hsl_to_rgb,
    is_neutral,
    lab_to_rgb,
    lch_to_rgb,
    normalize_hex,
    normalize_hue,
    parse_color,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_lab,
    rgb_to_lch,
)
from .contrast import (
    AccessibilityMode,
    AccessibilityReport,
    contrast_ratio,
    evaluate,
    is_accessible,
    relative_luminance,
)
from .dark_mode import build_dark_scale, mirror, mirror_levels, optimal_dark_base
from .difference import delta_e, delta_e_rgb
from .exceptions import InvalidFormat, TonescaleError, UnknownConfiguration
from .palette import Palette, build_palette
from .quality import QualityReport, scale_quality
from .scale import SCALE_CONFIGURATIONS, LevelConfiguration, Scale, Swatch, generate
from .search import RenderMode, find_accessible, search_accessible
from .spectrum import SPECTRUM_DEFINITION, find_spectrum_accessible, identify_spectrum

__all__ = [
    "HSL",
    "RGB",
    "Lab",
    "LCh",
    "clamp_hsl",
    "format_color_output",
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_hex",
    "hsl_to_rgb",
    "is_neutral",
    "lab_to_rgb",
    "lch_to_rgb",
    "normalize_hex",
    "normalize_hue",
    "parse_color",
    "rgb_to_hex",
    "rgb_to_hsl",
    "rgb_to_lab",
    "rgb_to_lch",
    "AccessibilityMode",
    "AccessibilityReport",
    "contrast_ratio",
    "evaluate",
    "is_accessible",
    "relative_luminance",
    "build_dark_scale",
    "mirror",
    "mirror_levels",
    "optimal_dark_base",
    "delta_e",
    "delta_e_rgb",
    "InvalidFormat",
    "TonescaleError",
    "UnknownConfiguration",
    "Palette",
    "build_palette",
    "QualityReport",
    "scale_quality",
    "SCALE_CONFIGURATIONS",
    "LevelConfiguration",
    "Scale",
    "Swatch",
    "generate",
    "RenderMode",
    "find_accessible",
    "search_accessible",
    "SPECTRUM_DEFINITION",
    "find_spectrum_accessible",
    "identify_spectrum",
]
