"""Tuned constants and static tables for tonescale.

Every number the generator and the search depend on lives here so the
empirically tuned values can be adjusted in one place. Tables are immutable
and are handed to the algorithms by reference.
"""

from types import MappingProxyType

# WCAG 2.x contrast thresholds
WCAG_AA_NORMAL = 4.5
WCAG_AA_LARGE = 3.0
WCAG_AAA_NORMAL = 7.0
WCAG_AAA_LARGE = 4.5

# Relative luminance (sRGB, WCAG 2.0 linearization)
LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)
WCAG_LINEAR_THRESHOLD = 0.03928
SRGB_SLOPE = 12.92
SRGB_OFFSET = 0.055
SRGB_DIVISOR = 1.055
SRGB_GAMMA = 2.4
CONTRAST_FLARE = 0.05

BLACK_RGB = (0, 0, 0)
WHITE_RGB = (255, 255, 255)
BLACK_HEX = "#000000"
WHITE_HEX = "#FFFFFF"

# CIE XYZ reference white (D65, 2 degree observer)
D65_WHITE = (95.047, 100.0, 108.883)

# Neutral colors
NEUTRAL_SATURATION_THRESHOLD = 15
NEUTRAL_LIGHTEST_L = 95
NEUTRAL_DARKEST_L = 28
NEUTRAL_EXTREME_SATURATION_DROP = 2

# Level geometry
CANONICAL_BASE_LEVEL = 400
LIGHTEST_CANONICAL_LEVEL = 50
DARKEST_CANONICAL_LEVEL = 800
LIGHT_EXTREME_LEVEL = 100
DARK_EXTREME_LEVEL = 700

# Dynamic boundary regimes (non-neutral branch)
VERY_LIGHT_BASE_L = 80
VERY_DARK_BASE_L = 30
VERY_SATURATED_BASE_S = 80
LOW_SATURATION_BASE_S = 30

# Reserved hue shift hooks for the two extreme ends of a scale
LIGHT_HUE_SHIFT = 0
DARK_HUE_SHIFT = 0

# level -> (delta lightness, delta saturation)
LEVEL_ADJUSTMENTS = MappingProxyType({
    50: (2, 0),
    100: (1, 0),
    200: (0, -1),
    600: (0, 2),
    700: (0, 3),
    800: (-2, 5),
})

# Accessible search
HUE_WEIGHT = 3.0
SATURATION_WEIGHT = 1.0
LIGHTNESS_WEIGHT = 0.5
SCORE_EPSILON = 0.1
SEARCH_CHUNK_SIZE = 256

# Preferred lightness bands for the first search stage, per render mode
LIGHT_MODE_LIGHTNESS_BAND = (25, 45)
DARK_MODE_LIGHTNESS_BAND = (60, 80)
SMART_LIGHTNESS_RADIUS = 10

# Upper hue bound (exclusive) -> family name; anything past 330 wraps to red
HUE_FAMILY_BUCKETS = (
    (30, "red"),
    (60, "orange"),
    (90, "yellow"),
    (150, "green"),
    (210, "cyan"),
    (270, "blue"),
    (330, "purple"),
    (360, "red"),
)

FAMILY_ACCESSIBLE_SWATCHES = MappingProxyType({
    "red": (0, 60, 45),
    "orange": (30, 70, 40),
    "yellow": (50, 80, 35),
    "green": (120, 60, 35),
    "cyan": (180, 60, 40),
    "blue": (210, 65, 45),
    "purple": (270, 60, 40),
})

# Spectrum-aware search
SPECTRUM_HUE_STEP = 2
SPECTRUM_SATURATION_STEP = 10
SPECTRUM_GOOD_ENOUGH = 15.0

# Quality scoring
TARGET_DELTA_E = 10.0
MIN_ADJACENT_DELTA_E = 2.0
MAX_ADJACENT_DELTA_E = 25.0

# Scale validation
MAX_SATURATION_JUMP = 40
MIN_DARK_LIGHTNESS_STEP = 8

# Dark base heuristic
DARK_BASE_SATURATION_BOOST = 8
