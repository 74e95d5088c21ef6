"""Tests for tonescale.color_utils module."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tonescale.color_utils import (
    HSL,
    RGB,
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
    parse_hex_color,
    parse_hsl_color,
    parse_hsv_color,
    parse_rgb_color,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_lab,
    rgb_to_lch,
    round_half_up,
)
from tonescale.exceptions import InvalidFormat, TonescaleError
from tonescale.scale import generate

# Configure hypothesis settings for faster tests
settings.register_profile("fast", max_examples=20, deadline=5000)
settings.load_profile("fast")

rgb_255_color_strategy = st.tuples(
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
)


class TestNormalizeHex:
    """Test hex normalization and validation."""

    def test_uppercases_six_digits(self):
        """Test lowercase digits are uppercased."""
        assert normalize_hex("#3791c6") == "#3791C6"

    def test_expands_three_digits(self):
        """Test shorthand hex is expanded."""
        assert normalize_hex("#abc") == "#AABBCC"

    def test_hash_is_optional(self):
        """Test the leading # may be omitted."""
        assert normalize_hex("3791C6") == "#3791C6"

    @pytest.mark.parametrize("value", ["#GG0000", "#FF00", "#FF000000", "", "#", "blue"])
    def test_invalid_values_raise(self, value):
        """Test malformed hex strings raise InvalidFormat."""
        with pytest.raises(InvalidFormat):
            normalize_hex(value)

    def test_non_string_raises(self):
        """Test non-string input raises InvalidFormat."""
        with pytest.raises(InvalidFormat):
            normalize_hex(0x3791C6)

    def test_invalid_format_is_value_error(self):
        """Test InvalidFormat can be caught as ValueError and TonescaleError."""
        with pytest.raises(ValueError):
            normalize_hex("nope")
        with pytest.raises(TonescaleError):
            normalize_hex("nope")


class TestHexConversions:
    """Test hex <-> RGB conversions."""

    def test_hex_to_rgb(self, scenario_hex, scenario_rgb):
        """Test parsing the scenario color."""
        assert hex_to_rgb(scenario_hex) == scenario_rgb

    def test_rgb_to_hex(self, scenario_hex, scenario_rgb):
        """Test formatting the scenario color."""
        assert rgb_to_hex(scenario_rgb) == scenario_hex

    def test_rgb_to_hex_clamps_and_rounds(self):
        """Test out of range channels are clamped and halves round up."""
        assert rgb_to_hex((300, -5, 12.5)) == "#FF000D"

    @given(rgb_255_color_strategy)
    def test_hex_round_trip(self, rgb):
        """Test hex formatting and parsing are inverses."""
        assert hex_to_rgb(rgb_to_hex(rgb)) == rgb


class TestHslConversions:
    """Test RGB <-> HSL conversions."""

    def test_scenario_color(self, scenario_hex, scenario_hsl):
        """Test the scenario color converts to whole-number HSL."""
        assert hex_to_hsl(scenario_hex) == scenario_hsl

    def test_primary_colors(self, primary_colors):
        """Test primaries convert exactly in both directions."""
        for rgb, hsl in primary_colors:
            assert rgb_to_hsl(rgb) == hsl
            assert hsl_to_rgb(hsl) == rgb

    def test_achromatic_shortcut(self):
        """Test grays report hue 0 and saturation 0."""
        assert rgb_to_hsl((128, 128, 128)) == HSL(0, 0, 50)

    def test_returns_named_tuples(self, scenario_rgb):
        """Test conversions return the named value types."""
        hsl = rgb_to_hsl(scenario_rgb)
        assert isinstance(hsl, HSL)
        assert isinstance(hsl_to_rgb(hsl), RGB)

    def test_hsl_to_hex(self):
        """Test HSL to hex convenience wrapper."""
        assert hsl_to_hex((0, 100, 50)) == "#FF0000"

    def test_hue_is_wrapped(self):
        """Test a hue of 360 and above wraps around."""
        assert hsl_to_rgb((360, 100, 50)) == hsl_to_rgb((0, 100, 50))
        assert hsl_to_rgb((480, 100, 50)) == hsl_to_rgb((120, 100, 50))

    @given(rgb_255_color_strategy)
    def test_precise_round_trip_within_one(self, rgb):
        """Test RGB -> HSL -> RGB reproduces each channel within 1."""
        back = hsl_to_rgb(rgb_to_hsl(rgb, precise=True))
        assert all(abs(a - b) <= 1 for a, b in zip(rgb, back))

    def test_rounded_round_trip_drifts(self):
        """Test whole-number HSL can land a few steps off while precise HSL is exact."""
        assert hsl_to_rgb(rgb_to_hsl((0, 0, 125))) == RGB(0, 0, 128)
        assert hsl_to_rgb(rgb_to_hsl((0, 0, 125), precise=True)) == RGB(0, 0, 125)

    @given(rgb_255_color_strategy)
    def test_rounded_hsl_is_in_range(self, rgb):
        """Test rounded HSL components stay in their ranges."""
        h, s, lightness = rgb_to_hsl(rgb)
        assert 0 <= h < 360
        assert 0 <= s <= 100
        assert 0 <= lightness <= 100


class TestHelpers:
    """Test hue, clamping and neutrality helpers."""

    @pytest.mark.parametrize("hue,expected", [(-30, 330), (360, 0), (725, 5), (0, 0)])
    def test_normalize_hue(self, hue, expected):
        """Test hues wrap into [0, 360)."""
        assert normalize_hue(hue) == expected

    def test_clamp_hsl(self):
        """Test clamping wraps hue and bounds saturation and lightness."""
        assert clamp_hsl((-30, 120, -5)) == HSL(330, 100, 0)

    def test_is_neutral_threshold(self):
        """Test neutrality is saturation strictly below 15."""
        assert is_neutral((0, 14.9, 50))
        assert not is_neutral((0, 15, 50))

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.4, 2), (-0.5, 0)])
    def test_round_half_up(self, value, expected):
        """Test halves round toward positive infinity."""
        assert round_half_up(value) == expected


class TestLabAndLch:
    """Test CIELAB and LCh conversions."""

    def test_white_and_black(self):
        """Test the extremes of the lightness axis."""
        white = rgb_to_lab((255, 255, 255))
        black = rgb_to_lab((0, 0, 0))
        assert white.l == pytest.approx(100.0, abs=0.01)
        assert abs(white.a) < 0.5 and abs(white.b) < 0.5
        assert black == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    @pytest.mark.parametrize("rgb", [(55, 145, 198), (255, 0, 0), (12, 200, 40), (128, 128, 128)])
    def test_lab_round_trip(self, rgb, scale_helpers):
        """Test RGB -> Lab -> RGB within one step per channel."""
        assert scale_helpers.channels_close(rgb, lab_to_rgb(rgb_to_lab(rgb)))

    @pytest.mark.parametrize("rgb", [(55, 145, 198), (200, 30, 90), (250, 240, 10)])
    def test_lch_round_trip(self, rgb, scale_helpers):
        """Test RGB -> LCh -> RGB within one step per channel."""
        lch = rgb_to_lch(rgb)
        assert 0 <= lch.h < 360
        assert lch.c >= 0
        assert scale_helpers.channels_close(rgb, lch_to_rgb(lch))

    def test_gray_has_no_chroma(self):
        """Test neutral gray has (near) zero chroma."""
        assert rgb_to_lch((128, 128, 128)).c < 0.5


class TestParseColor:
    """Test color string parsing."""

    def test_hex(self, scenario_hex, scenario_rgb):
        """Test hex input."""
        assert parse_color(scenario_hex) == scenario_rgb

    def test_rgb(self, scenario_rgb):
        """Test rgb() input with spaces."""
        assert parse_color("rgb(55, 145, 198)") == scenario_rgb

    def test_hsl(self):
        """Test hsl() input."""
        assert parse_color("hsl(0, 100%, 50%)") == RGB(255, 0, 0)

    def test_hsv(self):
        """Test hsv() input."""
        assert parse_color("hsv(0, 100%, 100%)") == RGB(255, 0, 0)
        assert parse_color("hsv(240, 100%, 100%)") == RGB(0, 0, 255)

    def test_individual_parsers_return_none(self):
        """Test format-specific parsers return None on other formats."""
        assert parse_hex_color("rgb(1, 2, 3)") is None
        assert parse_rgb_color("#FFFFFF") is None
        assert parse_hsl_color("hsv(0, 0%, 0%)") is None
        assert parse_hsv_color("hsl(0, 0%, 0%)") is None

    def test_invalid_formats(self, invalid_color_formats):
        """Test every invalid format raises InvalidFormat."""
        for value in invalid_color_formats:
            with pytest.raises(InvalidFormat, match="Invalid color format"):
                parse_color(value)


class TestFormatColorOutput:
    """Test formatting swatches for output."""

    def test_formats(self, scenario_hsl):
        """Test hex, rgb and hsl output of the base swatch."""
        base = generate(scenario_hsl, "minimal")
        assert format_color_output(base, "hex") == ["#3793C8"]
        assert format_color_output(base, "rgb") == ["rgb(55, 147, 200)"]
        assert format_color_output(base, "hsl") == ["hsl(202, 57%, 50%)"]

    def test_fractional_hsl_is_rounded(self, scenario_rgb):
        """Test a full precision base prints whole-number HSL."""
        base = generate(rgb_to_hsl(scenario_rgb, precise=True), "minimal")
        assert format_color_output(base, "hex") == ["#3791C6"]
        assert format_color_output(base, "hsl") == ["hsl(202, 57%, 50%)"]

    def test_one_entry_per_swatch(self, scenario_hsl):
        """Test every swatch of the scale is formatted."""
        scale = generate(scenario_hsl)
        assert len(format_color_output(scale)) == len(scale)
