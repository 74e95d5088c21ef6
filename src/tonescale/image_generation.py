"""Image generation utilities for tonescale."""

import click
import matplotlib.patches as patches
import matplotlib.pyplot as plt

from .scale import Scale

BACKGROUND_COLOR = "#FFFFFF"


def create_png_grid(
    scales: list[tuple[str, Scale]],
    output_file: str,
    tile_size: int = 48,
    tile_margin: int = 5,
) -> None:
    """Render named scales as rows of swatch tiles and save them as a PNG.

    Each tile is labelled with its level, drawn in the swatch's preferred
    text color.
    """
    rows = [(name, scale) for name, scale in scales if len(scale) > 0]
    if not rows:
        raise ValueError("No scales provided")

    columns = max(len(scale) for _, scale in rows)

    w = (columns * (tile_size + tile_margin)) + tile_margin
    # Extra bottom margin
    h = (len(rows) * (tile_size + tile_margin)) + tile_margin + tile_margin

    fig, ax = plt.subplots(figsize=(w / 100, h / 100), dpi=100)  # type: ignore[misc]

    fig.patch.set_facecolor(BACKGROUND_COLOR)
    ax.set_facecolor(BACKGROUND_COLOR)

    ax.set_xlim(0, w)
    ax.set_ylim(0, h)
    ax.axis("off")

    for row, (_, scale) in enumerate(rows):
        for col, swatch in enumerate(scale):
            # y is flipped so the first scale is the top row
            x = tile_margin + col * (tile_size + tile_margin)
            y = h - tile_margin - (row + 1) * (tile_size + tile_margin)

            rect = patches.Rectangle(
                (x, y), tile_size, tile_size, linewidth=0, facecolor=swatch.hex
            )
            ax.add_patch(rect)
            ax.text(
                x + tile_size / 2,
                y + tile_size / 2,
                str(swatch.level),
                color=swatch.accessibility.preferred_text,
                fontsize=max(4, tile_size // 6),
                ha="center",
                va="center",
            )

    plt.tight_layout()
    plt.savefig(output_file, bbox_inches="tight", pad_inches=0, dpi=100)  # type: ignore[misc]
    plt.close()

    click.echo(f"PNG grid saved to: {output_file}")
