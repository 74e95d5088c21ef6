"""Command-line interface for tonescale."""

import json
import logging
import sys
from typing import Any

import click

from . import __version__
from .color_utils import format_color_output
from .contrast import AccessibilityMode
from .exceptions import TonescaleError
from .image_generation import create_png_grid
from .palette import Palette, build_palette
from .quality import QualityReport
from .scale import DEFAULT_CONFIGURATION, SCALE_CONFIGURATIONS, Scale


def _named_scales(palette: Palette) -> list[tuple[str, Scale]]:
    scales = [("Light", palette.light)]
    if palette.accessible_light is not None:
        scales.append(("Accessible light", palette.accessible_light))
    if palette.accessible_dark is not None:
        scales.append(("Accessible dark", palette.accessible_dark))
    scales.append(("Dark", palette.dark))
    return scales


def _scale_to_json(scale: Scale, format_type: str) -> list[dict[str, Any]]:
    colors = format_color_output(scale, format_type)
    return [
        {
            "level": swatch.level,
            "color": color,
            "hex": swatch.hex,
            "black_ratio": swatch.accessibility.black_ratio,
            "white_ratio": swatch.accessibility.white_ratio,
            "preferred_text": swatch.accessibility.preferred_text,
            "is_base": swatch.is_base,
        }
        for swatch, color in zip(scale, colors)
    ]


def _quality_to_json(report: QualityReport | None) -> dict[str, Any] | None:
    if report is None:
        return None
    return {
        "mean_delta_e": round(report.mean, 2),
        "min_delta_e": round(report.minimum, 2),
        "max_delta_e": round(report.maximum, 2),
        "uniformity": round(report.uniformity, 1),
        "issues": list(report.issues),
    }


def _palette_to_json(palette: Palette, format_type: str) -> dict[str, Any]:
    def optional(scale: Scale | None) -> list[dict[str, Any]] | None:
        return _scale_to_json(scale, format_type) if scale is not None else None

    return {
        "base": palette.light.base.hex,
        "accessibility_mode": palette.accessibility_mode.value,
        "base_passes": palette.base_passes,
        "scales": {
            "light": _scale_to_json(palette.light, format_type),
            "accessible_light": optional(palette.accessible_light),
            "accessible_dark": optional(palette.accessible_dark),
            "dark": _scale_to_json(palette.dark, format_type),
        },
        "quality": {
            "light": _quality_to_json(palette.light_quality),
            "dark": _quality_to_json(palette.dark_quality),
        },
    }


def _echo_grid(palette: Palette, format_type: str) -> None:
    verdict = "passes" if palette.base_passes else "fails"
    click.echo(
        f"Base {palette.light.base.hex} {verdict} "
        f"{palette.accessibility_mode.label} accessibility"
    )

    for name, scale in _named_scales(palette):
        click.echo()
        click.echo(f"{name}:")
        for swatch, color in zip(scale, format_color_output(scale, format_type)):
            report = swatch.accessibility
            marker = "*" if swatch.is_base else " "
            click.echo(
                f"  {marker}{swatch.level:>4}  {color:22}"
                f"  black {report.black_ratio:5.2f} ({report.black_level:8})"
                f"  white {report.white_ratio:5.2f} ({report.white_level:8})"
            )

    if palette.light_quality is not None:
        quality = palette.light_quality
        click.echo()
        click.echo(
            f"Quality: mean dE {quality.mean:.2f}, uniformity {quality.uniformity:.1f}/100"
        )
        for issue in quality.issues:
            click.echo(f"  - {issue}")


@click.command()
@click.version_option(version=__version__, prog_name="tonescale")
@click.option(
    "-c",
    "--color",
    required=True,
    help="Base color in format: #RRGGBB, rgb(R,G,B), hsl(H,S%,L%), or hsv(H,S%,V%)",
)
@click.option(
    "--configuration",
    type=click.Choice(list(SCALE_CONFIGURATIONS), case_sensitive=False),
    default=DEFAULT_CONFIGURATION,
    help=f"Scale level configuration (default: {DEFAULT_CONFIGURATION})",
)
@click.option(
    "--accessibility",
    type=click.Choice([mode.value for mode in AccessibilityMode], case_sensitive=False),
    default=AccessibilityMode.FULL.value,
    help=(
        "Which text colors the base color must support (default: full). "
        "Options: full (black and white text), black-only, white-only"
    ),
)
@click.option(
    "--spectrum-aware",
    is_flag=True,
    help="Keep accessible alternatives inside the base color's hue family",
)
@click.option(
    "-f",
    "--format",
    type=click.Choice(["hex", "rgb", "hsl"], case_sensitive=False),
    default="hex",
    help="Output format for colors (default: hex)",
)
@click.option(
    "-F",
    "--output-format",
    type=click.Choice(["grid", "json", "png"], case_sensitive=False),
    default="grid",
    help="Output format (default: grid)",
)
@click.option(
    "-o", "--output", type=str, help="Output file path (required for PNG format)"
)
@click.option(
    "--tile-size",
    type=click.IntRange(8, 128),
    default=48,
    help="Size of square tiles in pixels for PNG format (default: 48)",
)
@click.option(
    "--tile-margin",
    type=click.IntRange(0, 20),
    default=5,
    help="Margin between tiles in pixels for PNG format (default: 5)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log search progress to stderr")
def main(
    color: str,
    configuration: str,
    accessibility: str,
    spectrum_aware: bool,
    format: str,
    output_format: str,
    output: str,
    tile_size: int,
    tile_margin: int,
    verbose: bool,
) -> None:
    """Generate an accessible tonal scale from a base color.

    tonescale derives a ramp of lighter and darker levels from the base
    color, checks it against WCAG contrast with black and white text, finds
    the nearest accessible alternative when the base fails, and mirrors the
    result into a dark mode scale.

    Examples:

        tonescale -c "#3791C6"

        tonescale -c "hsl(202, 57%, 50%)" --configuration extended -f hsl

        tonescale -c "#3791C6" --accessibility white-only --spectrum-aware

        tonescale -c "rgb(55, 145, 198)" -F json

        tonescale -c "#3791C6" -F png --tile-size 64 -o scale.png
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        palette = build_palette(
            color,
            configuration=configuration.lower(),
            accessibility_mode=AccessibilityMode(accessibility.lower()),
            spectrum_aware=spectrum_aware,
        )
        format_type = format.lower()

        if output_format == "json":
            click.echo(json.dumps(_palette_to_json(palette, format_type), indent=2))
        elif output_format == "png":
            if not output:
                click.echo("Error: PNG output requires -o/--output filename", err=True)
                sys.exit(1)

            try:
                create_png_grid(_named_scales(palette), output, tile_size, tile_margin)
            except Exception as e:
                click.echo(f"Error creating PNG: {e}", err=True)
                sys.exit(1)
        else:  # grid format
            _echo_grid(palette, format_type)

    except (ValueError, TonescaleError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
