"""
Board Reader Debug Utilities

Functions for saving annotated debug images and managing debug output.
"""

from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from sigmar.solver import Tile
from sigmar.solver.topology import playable_coords

from .layout import BoardLayout
from .result import ReadResult


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 20

# Annotation color per marble family
TILE_COLORS = {
    Tile.SALT: "white",
    Tile.AIR: "cyan",
    Tile.FIRE: "red",
    Tile.WATER: "blue",
    Tile.EARTH: "green",
    Tile.QUICKSILVER: "silver",
    Tile.VITAE: "yellow",
    Tile.MORS: "purple",
}
METAL_COLOR = "orange"


def save_debug_image(
    image: Image.Image,
    layout: BoardLayout,
    result: Optional[ReadResult],
    path: str
) -> None:
    """
    Save a board capture annotated with the marbles that were read.

    Annotations include:
    - Outline of every playable cell
    - Symbol of the marble read in each cell
    - Count validation errors

    Args:
        image: Board capture (board area only)
        layout: Board geometry used for the read
        result: Read result (can be None)
        path: Output file path
    """
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    debug_img = image.convert("RGB")
    draw = ImageDraw.Draw(debug_img)

    try:
        font = ImageFont.truetype("arial.ttf", 14)
    except OSError:
        font = ImageFont.load_default()

    for x, y in playable_coords():
        ix, iy, w, h = layout.marble_rect(x, y)
        tile = result.board.get_cell(x, y) if result else Tile.EMPTY
        if tile is Tile.EMPTY:
            draw.ellipse([ix, iy, ix + w, iy + h], outline="gray")
            continue
        color = METAL_COLOR if tile.is_metal else TILE_COLORS[tile]
        draw.ellipse([ix, iy, ix + w, iy + h], outline=color, width=2)
        draw.text((ix + w // 2 - 4, iy + h // 2 - 7), tile.symbol, fill=color, font=font)

    if result:
        summary = f"Marbles: {result.marble_count}, Time: {result.processing_time_ms:.1f}ms"
        draw.text((10, 10), summary, fill="white", font=font)
        for i, error in enumerate(result.errors):
            draw.text((10, 30 + 16 * i), error, fill="red", font=font)

    debug_img.save(path, "PNG")

    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError:
            pass
