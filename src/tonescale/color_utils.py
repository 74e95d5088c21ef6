"""Color parsing, conversion and formatting utilities for tonescale.

Colors travel through the package as small immutable tuples:

    RGB(r, g, b)    integer channels in [0, 255]
    HSL(h, s, l)    hue in degrees [0, 360), saturation/lightness in [0, 100]
    Lab(l, a, b)    CIELAB under a D65 reference white
    LCh(l, c, h)    polar form of Lab, hue in degrees [0, 360)

HSL <-> RGB and the Lab/LCh conversions are delegated to colour-science; the
functions here only adapt units, apply the rounding rules and clamp the
results. Every function returns a new value and never mutates its input.
"""

import math
import re
import warnings
from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple

import colour
import numpy as np

from .constants import D65_WHITE, NEUTRAL_SATURATION_THRESHOLD
from .exceptions import InvalidFormat

__all__ = [
    "RGB",
    "HSL",
    "Lab",
    "LCh",
    "round_half_up",
    "normalize_hue",
    "clamp_hsl",
    "is_neutral",
    "normalize_hex",
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "hex_to_hsl",
    "hsl_to_hex",
    "hsl_array_to_rgb",
    "rgb_to_lab",
    "rgb_array_to_lab",
    "lab_to_rgb",
    "rgb_to_lch",
    "lch_to_rgb",
    "parse_color",
    "format_color_output",
]


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: float
    s: float
    l: float  # noqa: E741


class Lab(NamedTuple):
    l: float  # noqa: E741
    a: float
    b: float


class LCh(NamedTuple):
    l: float  # noqa: E741
    c: float
    h: float


_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# colour-science expects the reference white as CIE xy chromaticity.
_D65_XY = colour.XYZ_to_xy(np.array(D65_WHITE) / 100.0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding up."""
    return int(math.floor(value + 0.5))


def normalize_hue(hue: float) -> float:
    """Wrap a hue in degrees into [0, 360)."""
    return ((hue % 360) + 360) % 360


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_hsl(hsl: Sequence[float]) -> HSL:
    """Wrap the hue and clamp saturation and lightness to [0, 100]."""
    h, s, lightness = hsl
    return HSL(normalize_hue(h), _clamp(s, 0, 100), _clamp(lightness, 0, 100))


def is_neutral(hsl: Sequence[float]) -> bool:
    """A color is neutral when its saturation is too low for hue to matter."""
    return hsl[1] < NEUTRAL_SATURATION_THRESHOLD


def normalize_hex(hex_str: Any) -> str:
    """Normalize a 3- or 6-digit hex color to uppercase ``#RRGGBB``.

    Raises:
        InvalidFormat: If the value is not a hex color.
    """
    if not isinstance(hex_str, str):
        raise InvalidFormat(f"Invalid hex color: {hex_str!r}")

    match = _HEX_PATTERN.match(hex_str.strip())
    if not match:
        raise InvalidFormat(f"Invalid hex color: '{hex_str}'")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)
    return "#" + digits.upper()


def hex_to_rgb(hex_str: str) -> RGB:
    digits = normalize_hex(hex_str)[1:]
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    r, g, b = (round_half_up(_clamp(c, 0, 255)) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_hsl(rgb: Sequence[float], precise: bool = False) -> HSL:
    """Convert an 8-bit RGB color to HSL.

    Achromatic colors (all channels equal) short-circuit to hue 0 and
    saturation 0 without computing a hue. By default every component is
    rounded to the nearest integer, so a round trip back to RGB can drift by
    up to 3 per channel (e.g. (0, 0, 125) comes back as (0, 0, 128)).
    ``precise=True`` keeps the floats, and the round trip is then exact.
    """
    channels = np.clip(np.array(rgb, dtype=float), 0.0, 255.0) / 255.0
    maximum, minimum = float(channels.max()), float(channels.min())

    if maximum == minimum:
        h, s, lightness = 0.0, 0.0, (maximum + minimum) / 2 * 100
    else:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            h, s, lightness = colour.RGB_to_HSL(channels)
        h, s, lightness = float(h) * 360, float(s) * 100, float(lightness) * 100

    if precise:
        return HSL(normalize_hue(h), s, lightness)
    return HSL(
        round_half_up(h) % 360, round_half_up(s), round_half_up(lightness)
    )


def hsl_array_to_rgb(hsl: Any) -> np.ndarray:
    """Convert an ``(n, 3)`` array of HSL colors to integer RGB channels.

    This is the batch form used when many candidates have to be evaluated at
    once; :func:`hsl_to_rgb` goes through the same path for a single color.
    """
    hsl = np.asarray(hsl, dtype=float).reshape(-1, 3)
    normalized = np.column_stack([
        np.mod(hsl[:, 0], 360.0) / 360.0,
        np.clip(hsl[:, 1], 0.0, 100.0) / 100.0,
        np.clip(hsl[:, 2], 0.0, 100.0) / 100.0,
    ])

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        rgb = colour.HSL_to_RGB(normalized)

    return np.clip(np.floor(np.asarray(rgb) * 255.0 + 0.5), 0, 255).astype(int)


def hsl_to_rgb(hsl: Sequence[float]) -> RGB:
    r, g, b = hsl_array_to_rgb([hsl])[0]
    return RGB(int(r), int(g), int(b))


def hex_to_hsl(hex_str: str) -> HSL:
    return rgb_to_hsl(hex_to_rgb(hex_str))


def hsl_to_hex(hsl: Sequence[float]) -> str:
    return rgb_to_hex(hsl_to_rgb(hsl))


def rgb_array_to_lab(rgb: Any) -> np.ndarray:
    """Convert an ``(n, 3)`` array of 8-bit RGB colors to CIELAB.

    The pipeline is sRGB -> XYZ (IEC 61966-2-1 decoding) -> Lab against the
    D65 reference white (95.047, 100.0, 108.883).
    """
    rgb = np.clip(np.asarray(rgb, dtype=float), 0.0, 255.0) / 255.0
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        xyz = colour.sRGB_to_XYZ(rgb)
        return np.asarray(colour.XYZ_to_Lab(xyz, illuminant=_D65_XY))


def rgb_to_lab(rgb: Sequence[float]) -> Lab:
    lab = rgb_array_to_lab(rgb)
    return Lab(float(lab[0]), float(lab[1]), float(lab[2]))


def lab_to_rgb(lab: Sequence[float]) -> RGB:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        xyz = colour.Lab_to_XYZ(np.array(lab, dtype=float), illuminant=_D65_XY)
        rgb = np.asarray(colour.XYZ_to_sRGB(xyz))

    r, g, b = np.clip(np.floor(rgb * 255.0 + 0.5), 0, 255).astype(int)
    return RGB(int(r), int(g), int(b))


def rgb_to_lch(rgb: Sequence[float]) -> LCh:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        lch = colour.Lab_to_LCHab(rgb_array_to_lab(rgb))
    return LCh(float(lch[0]), float(lch[1]), normalize_hue(float(lch[2])))


def lch_to_rgb(lch: Sequence[float]) -> RGB:
    lightness, chroma, hue = lch
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        lab = colour.LCHab_to_Lab(
            np.array([lightness, max(0.0, chroma), normalize_hue(hue)], dtype=float)
        )
    return lab_to_rgb(lab)


def parse_hex_color(color_str: str) -> RGB | None:
    """Parse hexadecimal color format #RGB or #RRGGBB."""
    try:
        return hex_to_rgb(color_str)
    except InvalidFormat:
        return None


def parse_rgb_color(color_str: str) -> RGB | None:
    """Parse RGB color format rgb(R, G, B)."""
    pattern = r"rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)"
    match = re.match(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    r, g, b = (int(match.group(i)) for i in range(1, 4))
    if not all(0 <= val <= 255 for val in (r, g, b)):
        return None

    return RGB(r, g, b)


def parse_hsl_color(color_str: str) -> RGB | None:
    """Parse HSL color format hsl(H, S%, L%)."""
    pattern = (
        r"hsl\s*\(\s*(\d+(?:\.\d+)?)\s*,\s*"
        r"(\d+(?:\.\d+)?)\s*%\s*,\s*(\d+(?:\.\d+)?)\s*%\s*\)"
    )
    match = re.match(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    h, s, lightness = (float(match.group(i)) for i in range(1, 4))
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= lightness <= 100):
        return None

    return hsl_to_rgb((h, s, lightness))


def parse_hsv_color(color_str: str) -> RGB | None:
    """Parse HSV color format hsv(H, S%, V%)."""
    pattern = (
        r"hsv\s*\(\s*(\d+(?:\.\d+)?)\s*,\s*"
        r"(\d+(?:\.\d+)?)\s*%\s*,\s*(\d+(?:\.\d+)?)\s*%\s*\)"
    )
    match = re.match(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    h, s, v = (float(match.group(i)) for i in range(1, 4))
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= v <= 100):
        return None

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        rgb = colour.HSV_to_RGB(np.array([(h % 360) / 360, s / 100, v / 100]))
    r, g, b = (round_half_up(float(c) * 255) for c in rgb)
    return RGB(r, g, b)


def parse_color(color_str: str) -> RGB:
    """Parse color string in various formats."""
    if not isinstance(color_str, str):
        raise InvalidFormat(f"Invalid color format: {color_str!r}")

    color_str = color_str.strip()

    parsers = [parse_hex_color, parse_rgb_color, parse_hsl_color, parse_hsv_color]

    for parser in parsers:
        result = parser(color_str)
        if result is not None:
            return result

    raise InvalidFormat(
        f"Invalid color format: '{color_str}'. "
        "Supported formats: #RGB, #RRGGBB, rgb(R,G,B), hsl(H,S%,L%), hsv(H,S%,V%)"
    )


def _format_number(value: float) -> str:
    return str(round_half_up(value))


def format_color_output(colors: Iterable[Any], format_type: str = "hex") -> list[str]:
    """Format swatches (anything with ``hex``, ``rgb`` and ``hsl``) for output."""
    formatted: list[str] = []

    for color in colors:
        if format_type == "rgb":
            r, g, b = color.rgb
            formatted.append(f"rgb({r}, {g}, {b})")
        elif format_type == "hsl":
            h, s, lightness = (_format_number(v) for v in color.hsl)
            formatted.append(f"hsl({h}, {s}%, {lightness}%)")
        else:  # hex
            formatted.append(color.hex)

    return formatted
