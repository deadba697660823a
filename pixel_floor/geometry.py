"""
Points, intersections and colour helpers.
"""

import re
from dataclasses import dataclass
from typing import Tuple

HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Intersection:
    """Both ends of one vertical outline segment, top first"""
    top: Point
    bottom: Point


def create_point(x: float, y: float) -> Point:
    return Point(x, y)


def is_hex_color(color: str) -> bool:
    return isinstance(color, str) and HEX_COLOR.match(color) is not None


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    if not is_hex_color(color):
        raise ValueError(f"Not a #RRGGBB colour: {color!r}")
    return (int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16))


def shade_color(color: str, percent: float) -> str:
    """
    Lighten (positive percent) or darken (negative percent) a hex colour.
    Each channel is scaled then truncated toward zero, like parseInt does,
    and kept inside 0-255.
    """
    channels = []
    for value in hex_to_rgb(color):
        shaded = int(value * (100 + percent) / 100)
        channels.append(min(255, max(0, shaded)))

    return '#' + ''.join(f"{c:02x}" for c in channels)
