"""Test configuration and fixtures for tonescale tests."""

from typing import List, Tuple

import pytest

from tonescale.color_utils import HSL, RGB
from tonescale.scale import LevelConfiguration, Scale, make_swatch


@pytest.fixture
def scenario_hex() -> str:
    """A mid blue that reads with black text but not with white text."""
    return "#3791C6"


@pytest.fixture
def scenario_rgb() -> RGB:
    return RGB(55, 145, 198)


@pytest.fixture
def scenario_hsl() -> HSL:
    return HSL(202, 57, 50)


@pytest.fixture
def accessible_hsl() -> HSL:
    """Passes AA for both black and white text."""
    return HSL(202, 57, 42)


@pytest.fixture
def neutral_hsl() -> HSL:
    return HSL(0, 5, 50)


@pytest.fixture
def wide_neutral_configuration() -> LevelConfiguration:
    return LevelConfiguration("wide", "Wide (3 levels)", (100, 400, 800))


@pytest.fixture
def primary_colors() -> List[Tuple[RGB, HSL]]:
    """Provide RGB colors with their exact HSL values."""
    return [
        (RGB(255, 0, 0), HSL(0, 100, 50)),
        (RGB(0, 255, 0), HSL(120, 100, 50)),
        (RGB(0, 0, 255), HSL(240, 100, 50)),
        (RGB(255, 255, 255), HSL(0, 0, 100)),
        (RGB(0, 0, 0), HSL(0, 0, 0)),
    ]


@pytest.fixture
def invalid_color_formats() -> List[str]:
    """Provide examples of invalid color format strings."""
    return [
        "invalid",
        "#GG0000",             # Invalid hex characters
        "#FF00",               # Four digits
        "#FF000000",           # Too long hex
        "rgb(256, 0, 0)",      # RGB value out of range
        "rgb(255, 0)",         # Missing RGB component
        "hsl(361, 50%, 50%)",  # HSL hue out of range
        "hsl(180, 101%, 50%)", # HSL saturation out of range
        "hsv(180, 50%, 101%)", # HSV value out of range
        "",                    # Empty string
        "   ",                 # Whitespace only
    ]


class ScaleTestHelpers:
    """Helper class with utility methods for scale testing."""

    @staticmethod
    def build_scale(colors: List[Tuple[int, Tuple[float, float, float]]], base_level: int) -> Scale:
        """Build a scale directly from (level, hsl) pairs."""
        swatches = tuple(
            make_swatch(level, hsl, is_base=level == base_level) for level, hsl in colors
        )
        return Scale(swatches=swatches, base_level=base_level, configuration="custom")

    @staticmethod
    def channels_close(a: Tuple[int, int, int], b: Tuple[int, int, int], tolerance: int = 1) -> bool:
        """Check if two RGB colors differ by at most ``tolerance`` per channel."""
        return all(abs(x - y) <= tolerance for x, y in zip(a, b))


@pytest.fixture
def scale_helpers() -> ScaleTestHelpers:
    """Provide helper methods for scale testing."""
    return ScaleTestHelpers()
