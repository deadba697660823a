"""
Draw commands produced by the layer functions.

A layer is a plain tuple of commands, so a tile and its variations can
share the plank layer without copying it.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .geometry import Point


@dataclass(frozen=True)
class LineCommand:
    """1px stroke between two points"""
    start: Point
    end: Point
    color: str


@dataclass(frozen=True)
class RectCommand:
    """Filled rectangle, argument order follows the plank drawing calls"""
    x: float
    y: float
    height: float
    width: float
    color: str


Command = Union[LineCommand, RectCommand]
Layer = Tuple[Command, ...]
