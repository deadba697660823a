"""
Preview mosaic: the tile and its variations repeated over a larger canvas
to check how the floor looks once tiled.
"""

import random
from typing import Optional, Sequence

from PIL import Image

from .composer import TileResult
from .render import render_tile


def compose_mosaic(tiles: Sequence[TileResult], tile_width: int, tile_height: int,
                   scale: int, rng: Optional[random.Random] = None) -> Image.Image:
    """
    Fill a (tile_width * scale) x (tile_height * scale) canvas, picking a
    random tile for every cell. The pick is cosmetic and does not use the
    floor seed; pass rng to make it repeatable.
    """
    if not tiles:
        raise ValueError("Need at least one tile to build a preview")
    if rng is None:
        rng = random

    rendered = [render_tile(tile, tile_width, tile_height) for tile in tiles]

    mosaic = Image.new('RGBA', (tile_width * scale, tile_height * scale), (0, 0, 0, 0))
    for x in range(0, tile_width * scale, tile_width):
        for y in range(0, tile_height * scale, tile_height):
            mosaic.paste(rng.choice(rendered), (x, y))

    return mosaic
