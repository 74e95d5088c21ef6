"""Tests for tonescale.cli module."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from tonescale.cli import main


class TestMainCommand:
    """Test the main CLI command."""

    def test_help(self):
        """Test --help describes the command."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Generate an accessible tonal scale" in result.output
        assert "--configuration" in result.output
        assert "--accessibility" in result.output

    def test_version(self):
        """Test --version prints the program name."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "tonescale, version" in result.output

    def test_missing_color(self):
        """Test the color option is required."""
        runner = CliRunner()
        result = runner.invoke(main, [])

        assert result.exit_code != 0
        assert "Missing option" in result.output

    def test_grid_output(self):
        """Test the default grid output for a failing base."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6"])

        assert result.exit_code == 0
        assert "Base #3791C6 fails All 4 Criteria accessibility" in result.output
        assert "Light:" in result.output
        assert "Accessible light:" in result.output
        assert "Accessible dark:" in result.output
        assert "Dark:" in result.output
        assert "*400  #3791C6" in result.output
        assert "black  6.03 (AA      )" in result.output
        assert "Quality:" in result.output

    def test_black_only(self):
        """Test a base passing black-only mode has no accessible scales."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6", "--accessibility", "black-only"])

        assert result.exit_code == 0
        assert "passes Black Text accessibility" in result.output
        assert "Accessible light:" not in result.output

    def test_json_output(self):
        """Test JSON output structure."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "rgb(55, 145, 198)", "-F", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["base"] == "#3791C6"
        assert data["accessibility_mode"] == "full"
        assert data["base_passes"] is False
        assert set(data["scales"]) == {"light", "accessible_light", "accessible_dark", "dark"}
        assert len(data["scales"]["light"]) == 7

        base = next(entry for entry in data["scales"]["light"] if entry["is_base"])
        assert base["level"] == 400
        assert base["black_ratio"] == 6.03
        assert base["white_ratio"] == 3.48
        assert base["preferred_text"] == "#000000"
        assert data["quality"]["light"]["uniformity"] >= 0

    def test_rgb_format(self):
        """Test colors are formatted as rgb()."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6", "-F", "json", "-f", "rgb"])

        data = json.loads(result.stdout)
        base = next(entry for entry in data["scales"]["light"] if entry["is_base"])
        assert base["color"] == "rgb(55, 145, 198)"
        assert base["hex"] == "#3791C6"

    def test_hsl_format_grid(self):
        """Test colors are formatted as hsl() in the grid."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6", "-f", "hsl"])

        assert result.exit_code == 0
        assert "hsl(202, 57%, 50%)" in result.output

    def test_minimal_configuration(self):
        """Test the minimal configuration outputs one level per scale."""
        runner = CliRunner()
        result = runner.invoke(
            main, ["-c", "#3791C6", "--configuration", "minimal", "-F", "json"]
        )

        data = json.loads(result.stdout)
        assert len(data["scales"]["light"]) == 1
        assert data["quality"]["light"]["uniformity"] == 100.0

    def test_invalid_color(self):
        """Test an invalid color exits with an error."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "invalid-color"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "Invalid color format" in result.output

    def test_png_requires_output(self):
        """Test PNG output without a filename exits with an error."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6", "-F", "png"])

        assert result.exit_code == 1
        assert "PNG output requires -o/--output filename" in result.output

    def test_png_output(self):
        """Test PNG output hands the named scales to the renderer."""
        runner = CliRunner()
        with patch("tonescale.cli.create_png_grid") as mock_create:
            result = runner.invoke(
                main, ["-c", "#3791C6", "-F", "png", "-o", "scale.png", "--tile-size", "64"]
            )

        assert result.exit_code == 0
        mock_create.assert_called_once()
        scales, output_file, tile_size, tile_margin = mock_create.call_args[0]
        assert [name for name, _ in scales] == ["Light", "Accessible light", "Accessible dark", "Dark"]
        assert output_file == "scale.png"
        assert tile_size == 64
        assert tile_margin == 5

    def test_png_failure(self):
        """Test renderer errors are reported."""
        runner = CliRunner()
        with patch("tonescale.cli.create_png_grid", side_effect=OSError("disk full")):
            result = runner.invoke(main, ["-c", "#3791C6", "-F", "png", "-o", "scale.png"])

        assert result.exit_code == 1
        assert "Error creating PNG: disk full" in result.output

    def test_tile_size_range(self):
        """Test tile size outside its range is rejected."""
        runner = CliRunner()
        result = runner.invoke(main, ["-c", "#3791C6", "-F", "png", "-o", "x.png", "--tile-size", "4"])

        assert result.exit_code != 0

    def test_verbose_configures_logging(self):
        """Test -v turns on debug logging."""
        runner = CliRunner()
        with patch("tonescale.cli.logging.basicConfig") as mock_basic_config:
            result = runner.invoke(main, ["-c", "#3791C6", "-v"])

        assert result.exit_code == 0
        mock_basic_config.assert_called_once()
        assert mock_basic_config.call_args.kwargs["level"] == 10

    def test_unexpected_error(self):
        """Test unexpected errors are reported and exit 1."""
        runner = CliRunner()
        with patch("tonescale.cli.build_palette", side_effect=RuntimeError("boom")):
            result = runner.invoke(main, ["-c", "#3791C6"])

        assert result.exit_code == 1
        assert "Unexpected error: boom" in result.output
