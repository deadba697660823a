"""
Rasterise draw commands into Pillow images.

Tiles are pixel art, so commands are painted straight into a numpy array
with no anti-aliasing: a 1px stroke at x + 0.5 fills pixel column x.
"""

import base64
import io
import math
from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image

from .commands import Command, LineCommand, RectCommand
from .geometry import hex_to_rgb


def _rgba(color: str) -> Tuple[int, int, int, int]:
    return hex_to_rgb(color) + (255,)


def _span(a: float, b: float, limit: int) -> Tuple[int, int]:
    """Pixels covered along a stroke, as a clipped [start, stop) range"""
    low, high = min(a, b), max(a, b)
    start = math.floor(low)
    stop = max(start + 1, math.ceil(high))
    return max(0, start), min(limit, stop)


def _paint_rect(img_array: np.ndarray, rect: RectCommand):
    height, width = img_array.shape[:2]
    top = max(0, int(round(rect.y)))
    bottom = min(height, int(round(rect.y + rect.height)))
    left = max(0, int(round(rect.x)))
    right = min(width, int(round(rect.x + rect.width)))
    if top < bottom and left < right:
        img_array[top:bottom, left:right] = _rgba(rect.color)


def _paint_line(img_array: np.ndarray, line: LineCommand):
    height, width = img_array.shape[:2]
    start, end = line.start, line.end
    color = _rgba(line.color)

    if start.x == end.x:
        column = math.floor(start.x)
        if 0 <= column < width:
            top, bottom = _span(start.y, end.y, height)
            img_array[top:bottom, column] = color
    elif start.y == end.y:
        row = math.floor(start.y)
        if 0 <= row < height:
            left, right = _span(start.x, end.x, width)
            img_array[row, left:right] = color
    else:
        raise ValueError(f"Only horizontal and vertical lines are supported: {line}")


def render_layer(commands: Iterable[Command], width: int, height: int,
                 background: Optional[str] = None) -> Image.Image:
    """
    Paint commands in order onto a width x height RGBA image. Later
    commands cover earlier ones; pixels nothing covers stay transparent
    unless a background colour is given.
    """
    img_array = np.zeros((height, width, 4), dtype=np.uint8)
    if background is not None:
        img_array[:, :] = _rgba(background)

    for command in commands:
        if isinstance(command, RectCommand):
            _paint_rect(img_array, command)
        else:
            _paint_line(img_array, command)

    return Image.fromarray(img_array)


def render_tile(tile, width: int, height: int) -> Image.Image:
    return render_layer(tile.commands, width, height)


def to_png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()


def to_data_url(img: Image.Image) -> str:
    encoded = base64.b64encode(to_png_bytes(img)).decode('ascii')
    return f"data:image/png;base64,{encoded}"
