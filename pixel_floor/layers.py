"""
Layers of the floor texture: planks, outlines and intersection T-marks.

Each function returns the draw commands of its layer. The order in which
they pull numbers from the SeededRandom is part of the output: planks,
then vertical outlines, then intersections. Horizontal outlines use no
randomness.
"""

import math
from typing import List, Tuple

from .commands import Layer, LineCommand, RectCommand
from .geometry import Intersection, Point, create_point
from .random_source import SeededRandom

# Chance for a plank to keep the default colour instead of the darker one
DEFAULT_PLANK_CHANCE = 0.7

# Stand-in for "no previous outline / intersection yet", far off the tile
NO_PREVIOUS = -50


def draw_planks(height: float, width: float, plank_spacing: float,
                rnd: SeededRandom, plank_color: str, darker_color: str) -> Layer:
    """One full width band per plank row, randomly default or darker"""
    planks = []
    y = 0
    while y < height:
        is_default_plank = rnd.next() < DEFAULT_PLANK_CHANCE
        color = plank_color if is_default_plank else darker_color
        planks.append(RectCommand(0, y, plank_spacing, width, color))
        y += plank_spacing

    return tuple(planks)


def draw_horizontal_outlines(height: float, width: float, plank_spacing: float,
                             color: str) -> Layer:
    """
    One line on the last pixel row of every plank.

    The 0.5 puts a 1px stroke exactly on a pixel row instead of
    anti-aliasing it across two.
    """
    lines = []
    y = 0
    while y < height:
        y += plank_spacing - 1
        start = create_point(0, y + 0.5)
        end = create_point(width, y + 0.5)
        lines.append(LineCommand(start, end, color))
        y += 1

    return tuple(lines)


def adjust_x(x: int, previous_x: int, min_gap: int, rnd: SeededRandom) -> int:
    """
    Keep a vertical outline at least min_gap away from the one in the row
    above. Two outlines that close look like a single thick one.
    """
    diff = abs(previous_x - x)
    adjusted_x = x

    if diff <= min_gap:
        adjusted_x = previous_x - min_gap if x < previous_x else previous_x + min_gap

    # Same spot as the previous outline: no side to push away from, flip a coin
    if diff == 0:
        is_outline_on_left = math.floor(2 * rnd.next()) == 1
        adjusted_x = previous_x - min_gap if is_outline_on_left else previous_x + min_gap

    return adjusted_x


def draw_vertical_outlines(height: float, width: float, plank_spacing: float,
                           min_gap: int, rnd: SeededRandom,
                           color: str) -> Tuple[Layer, List[Intersection]]:
    """
    One vertical outline per plank row, at a random x.

    Returns the lines and, for every row, the Intersection made of the
    segment's top and bottom points.
    """
    # Keep min_gap of margin on both sides so adjust_x stays inside the tile
    min_x = min_gap
    max_x = width - 1 - min_gap

    lines = []
    intersections = []
    previous_x = NO_PREVIOUS
    y = 0
    while y < height:
        x = rnd.next_int(min_x, max_x)
        x = adjust_x(x, previous_x, min_gap, rnd)
        previous_x = x

        x += 0.5
        start = create_point(x, y - 1)
        end = create_point(x, y + plank_spacing - 1)
        lines.append(LineCommand(start, end, color))
        intersections.append(Intersection(start, end))

        y += plank_spacing

    return tuple(lines), intersections


def _vertical_spread(intersection: Intersection, rnd: SeededRandom,
                     min_spread: int, max_spread: int) -> Tuple[Point, Point]:
    """Center and end of the T stem, always pointing into the plank"""
    should_darken_top = rnd.next() > 0.5
    direction = 1 if should_darken_top else -1
    spread = rnd.next_int(min_spread, max_spread) * direction
    point = intersection.top if should_darken_top else intersection.bottom

    return create_point(point.x, point.y), create_point(point.x, point.y + spread)


def _connection(center: Point, previous: Point,
                connect_distance: float) -> Tuple[bool, bool]:
    """(should the marks touch, is the previous mark on the left)"""
    if previous.y != center.y:
        return False, False

    diff = center.x - previous.x
    return abs(diff) <= connect_distance, diff > 0


def _horizontal_spread(center: Point, previous: Point, connect_distance: float,
                       rnd: SeededRandom, min_spread: int,
                       max_spread: float) -> Tuple[Point, Point]:
    """Both ends of the T bar"""
    left_spread = rnd.next_int(min_spread, max_spread)
    right_spread = rnd.next_int(min_spread, max_spread)

    should_connect, previous_on_left = _connection(center, previous, connect_distance)
    if should_connect:
        # Stretch the facing branch so both bars meet exactly
        distance = abs(previous.x - center.x)
        if previous_on_left:
            left_spread = distance
        else:
            right_spread = distance

    bar = create_point(center.x - 0.5, center.y + 0.5)
    return (create_point(bar.x - left_spread, bar.y),
            create_point(bar.x + right_spread, bar.y))


def draw_intersections(intersections: List[Intersection], connect_distance: float,
                       min_gap: int, plank_spacing: float, rnd: SeededRandom,
                       enabled: bool, color: str) -> Layer:
    """
    Darken about half of the intersections with a "T": a bar along the
    horizontal outline and a stem running into the plank.

    When disabled, every random draw still happens so that the outlines of
    the following variations come out the same either way.
    """
    max_vert_spread = math.floor(plank_spacing / 2)
    min_vert_spread = math.floor(max_vert_spread / 4)
    max_horiz_spread = min_gap / 2
    min_horiz_spread = math.floor(max_horiz_spread / 3)

    marks = []
    previous = create_point(NO_PREVIOUS, NO_PREVIOUS)
    for intersection in intersections:
        should_be_darkened = rnd.next() < 0.5
        if not should_be_darkened:
            continue

        center, stem_end = _vertical_spread(
            intersection, rnd, min_vert_spread, max_vert_spread)
        left, right = _horizontal_spread(
            center, previous, connect_distance, rnd,
            min_horiz_spread, max_horiz_spread)
        previous = center

        # TODO: stop drawing numbers for disabled marks once seeds from
        # older versions no longer need to reproduce.
        if not enabled:
            continue

        marks.append(LineCommand(left, right, color))
        marks.append(LineCommand(center, stem_end, color))

    return tuple(marks)
