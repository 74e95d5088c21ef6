"""Tests for image generation utilities."""

import os
import tempfile
from unittest.mock import MagicMock, patch

import pytest

from tonescale.image_generation import create_png_grid
from tonescale.scale import generate


class TestCreatePngGrid:
    """Test the create_png_grid function."""

    def test_empty_scales_raises_error(self):
        """Test that an empty scale list raises ValueError."""
        with pytest.raises(ValueError, match="No scales provided"):
            create_png_grid([], "test.png")

    def test_single_row(self, scenario_hsl):
        """Test PNG grid creation for one seven level scale."""
        scale = generate(scenario_hsl)

        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout') as mock_tight_layout, \
             patch('matplotlib.pyplot.savefig') as mock_savefig, \
             patch('matplotlib.pyplot.close') as mock_close, \
             patch('click.echo') as mock_echo:

            mock_fig = MagicMock()
            mock_ax = MagicMock()
            mock_subplots.return_value = (mock_fig, mock_ax)

            create_png_grid([("Light", scale)], "scale.png")

            # 7 * (48 + 5) + 5 wide, 1 * (48 + 5) + 10 high
            mock_subplots.assert_called_once_with(figsize=(376 / 100, 63 / 100), dpi=100)
            mock_fig.patch.set_facecolor.assert_called_once_with("#FFFFFF")
            mock_ax.set_facecolor.assert_called_once_with("#FFFFFF")
            mock_ax.set_xlim.assert_called_once_with(0, 376)
            mock_ax.set_ylim.assert_called_once_with(0, 63)
            mock_ax.axis.assert_called_once_with('off')
            mock_tight_layout.assert_called_once()
            mock_savefig.assert_called_once_with(
                "scale.png", bbox_inches='tight', pad_inches=0, dpi=100
            )
            mock_close.assert_called_once()
            mock_echo.assert_called_once_with("PNG grid saved to: scale.png")

            assert mock_ax.add_patch.call_count == 7
            assert mock_ax.text.call_count == 7

    def test_tiles_use_swatch_colors(self, scenario_hsl):
        """Test each tile is filled with its swatch and labelled with its level."""
        scale = generate(scenario_hsl)

        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_fig = MagicMock()
            mock_ax = MagicMock()
            mock_subplots.return_value = (mock_fig, mock_ax)

            create_png_grid([("Light", scale)], "scale.png")

            rectangles = [call[0][0] for call in mock_ax.add_patch.call_args_list]
            base_rect = rectangles[3]
            assert base_rect.get_width() == 48
            assert base_rect.get_xy() == (5 + 3 * 53, 5)

            labels = [call[0][2] for call in mock_ax.text.call_args_list]
            assert labels == [str(level) for level in scale.levels]
            base_label = mock_ax.text.call_args_list[3]
            assert base_label.kwargs["color"] == scale.base.accessibility.preferred_text

    def test_multiple_rows(self, scenario_hsl):
        """Test two scales produce two rows of tiles."""
        light = generate(scenario_hsl)
        minimal = generate(scenario_hsl, "minimal")

        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_fig = MagicMock()
            mock_ax = MagicMock()
            mock_subplots.return_value = (mock_fig, mock_ax)

            create_png_grid([("Light", light), ("Minimal", minimal)], "scale.png")

            mock_subplots.assert_called_once_with(figsize=(376 / 100, 116 / 100), dpi=100)
            assert mock_ax.add_patch.call_count == 8

    def test_custom_tile_size(self, scenario_hsl):
        """Test the tile size and margin drive the canvas size."""
        scale = generate(scenario_hsl, "simple")

        with patch('matplotlib.pyplot.subplots') as mock_subplots, \
             patch('matplotlib.pyplot.tight_layout'), \
             patch('matplotlib.pyplot.savefig'), \
             patch('matplotlib.pyplot.close'), \
             patch('click.echo'):

            mock_fig = MagicMock()
            mock_ax = MagicMock()
            mock_subplots.return_value = (mock_fig, mock_ax)

            create_png_grid([("Light", scale)], "scale.png", tile_size=64, tile_margin=0)

            mock_subplots.assert_called_once_with(figsize=(192 / 100, 64 / 100), dpi=100)

    def test_real_file_creation(self, scenario_hsl):
        """Test that a PNG file is actually written."""
        scale = generate(scenario_hsl, "simple")

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as tmp:
            path = tmp.name
        try:
            with patch('click.echo'):
                create_png_grid([("Light", scale)], path, tile_size=16, tile_margin=2)
            assert os.path.getsize(path) > 0
        finally:
            os.unlink(path)
