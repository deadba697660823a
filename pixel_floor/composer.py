"""
Stack the layers into tiles and build the variations of one floor.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .commands import Command, Layer
from .config import FloorConfig
from .layers import (
    draw_horizontal_outlines,
    draw_intersections,
    draw_planks,
    draw_vertical_outlines,
)
from .random_source import SeededRandom, make_id


@dataclass(frozen=True)
class TileResult:
    """One complete floor tile, layers in drawing order"""
    planks: Layer
    outlines: Layer
    intersections: Layer

    @property
    def commands(self) -> Iterator[Command]:
        yield from self.planks
        yield from self.outlines
        yield from self.intersections


@dataclass(frozen=True)
class GenerationResult:
    seed: str
    config: FloorConfig
    tiles: Tuple[TileResult, ...]

    @property
    def result(self) -> TileResult:
        return self.tiles[0]

    @property
    def variations(self) -> Tuple[TileResult, ...]:
        return self.tiles[1:]


def compose_tile(planks: Layer, outlines: Layer, intersections: Layer) -> TileResult:
    """Planks under outlines under intersection marks"""
    return TileResult(tuple(planks), tuple(outlines), tuple(intersections))


def generate(config: FloorConfig, seed: Optional[str] = None) -> GenerationResult:
    """
    Build the result tile and config.nb_variations variations from one seed.

    Planks and horizontal outlines are drawn once and shared by every tile.
    Vertical outlines and intersections are drawn again for each tile from
    the same, continuing random stream, so variation k of a seed is always
    the same.
    """
    config.validate()
    if seed is None:
        seed = make_id()

    rnd = SeededRandom(seed)
    colors = config.colors
    width, height = config.width, config.height
    spacing = config.plank_spacing
    min_gap = config.min_outline_gap

    planks = draw_planks(height, width, spacing, rnd, colors.plank, colors.darker_plank)
    horizontal_outlines = draw_horizontal_outlines(height, width, spacing, colors.outline)

    tiles = []
    for _ in range(config.nb_variations + 1):
        vertical_outlines, intersections = draw_vertical_outlines(
            height, width, spacing, min_gap, rnd, colors.outline)

        # No horizontal outline above the first row, nothing to darken there
        marks = draw_intersections(
            intersections[1:], config.connect_distance, min_gap, spacing,
            rnd, config.intersections_enabled, colors.intersection)

        tiles.append(compose_tile(planks, horizontal_outlines + vertical_outlines, marks))

    return GenerationResult(seed, config, tuple(tiles))
