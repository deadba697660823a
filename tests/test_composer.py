"""Tests for tile composition and full floor generation"""
import math
import random

import pytest

from pixel_floor.commands import LineCommand, RectCommand
from pixel_floor.composer import TileResult, compose_tile, generate
from pixel_floor.config import ConfigError, FloorConfig
from pixel_floor.layers import (
    draw_horizontal_outlines,
    draw_intersections,
    draw_planks,
    draw_vertical_outlines,
)
from pixel_floor.random_source import SeededRandom

GOLDEN_SEED = "AAAAAAAAAA"


def stems(tile):
    """Vertical strokes of the T-marks"""
    return tile.intersections[1::2]


def as_rows(tile):
    """Flatten a tile into plain tuples"""
    rows = []
    for command in tile.commands:
        if isinstance(command, RectCommand):
            rows.append(('rect', command.x, command.y, command.height, command.width, command.color))
        else:
            rows.append(('line', command.start.x, command.start.y,
                         command.end.x, command.end.y, command.color))
    return rows


def replay_floor(seed, width, height, nb_planks, gap, connect, nb_variations, colors):
    """
    Rebuild every tile straight from random.Random, one number at a time,
    without going through the layer functions.
    """
    stream = random.Random(seed)

    def pick(low, high):
        return math.floor(stream.random() * (high - low) + low)

    spacing = height / nb_planks
    planks = []
    horizontal = []
    y = 0
    while y < height:
        color = colors.plank if stream.random() < 0.7 else colors.darker_plank
        planks.append(('rect', 0, y, spacing, width, color))
        row = y + (spacing - 1) + 0.5
        horizontal.append(('line', 0, row, width, row, colors.outline))
        y += spacing

    tiles = []
    for _ in range(nb_variations + 1):
        vertical = []
        segments = []
        previous_x = -50
        y = 0
        while y < height:
            x = pick(gap, width - 1 - gap)
            if x == previous_x:
                x = previous_x - gap if math.floor(2 * stream.random()) == 1 else previous_x + gap
            elif abs(x - previous_x) <= gap:
                x = previous_x - gap if x < previous_x else previous_x + gap
            previous_x = x
            vertical.append(('line', x + 0.5, y - 1, x + 0.5, y + spacing - 1, colors.outline))
            segments.append(((x + 0.5, y - 1), (x + 0.5, y + spacing - 1)))
            y += spacing

        max_vert = math.floor(spacing / 2)
        min_vert = math.floor(max_vert / 4)
        max_horiz = gap / 2
        min_horiz = math.floor(max_horiz / 3)

        marks = []
        previous = (-50, -50)
        for top, bottom in segments[1:]:
            if stream.random() >= 0.5:
                continue
            from_top = stream.random() > 0.5
            length = pick(min_vert, max_vert)
            cx, cy = top if from_top else bottom
            stem_y = cy + length if from_top else cy - length
            left = pick(min_horiz, max_horiz)
            right = pick(min_horiz, max_horiz)
            if previous[1] == cy and abs(cx - previous[0]) <= connect:
                if cx > previous[0]:
                    left = abs(previous[0] - cx)
                else:
                    right = abs(previous[0] - cx)
            previous = (cx, cy)
            marks.append(('line', cx - 0.5 - left, cy + 0.5, cx - 0.5 + right, cy + 0.5,
                          colors.intersection))
            marks.append(('line', cx, cy, cx, stem_y, colors.intersection))

        tiles.append(planks + horizontal + vertical + marks)

    return tiles


class TestComposeTile:
    def test_layer_order(self):
        plank = RectCommand(0, 0, 4, 32, "#96704A")
        outline = LineCommand((0, 3.5), (32, 3.5), "#886542")
        mark = LineCommand((10, 3.5), (12, 3.5), "#82603f")
        tile = compose_tile((plank,), [outline], (mark,))
        assert list(tile.commands) == [plank, outline, mark]

    def test_commands_can_be_read_twice(self):
        tile = compose_tile((RectCommand(0, 0, 1, 1, "#000000"),), (), ())
        assert list(tile.commands) == list(tile.commands)


class TestGenerate:
    """Test the whole pipeline from one seed"""

    def test_determinism(self):
        config = FloorConfig(nb_variations=3)
        assert generate(config, GOLDEN_SEED) == generate(config, GOLDEN_SEED)

    def test_different_seeds_differ(self):
        config = FloorConfig()
        assert generate(config, "AAAAAAAAAA").tiles != generate(config, "BBBBBBBBBB").tiles

    def test_random_seed_when_missing(self):
        generation = generate(FloorConfig())
        assert len(generation.seed) == 10
        assert generation == generate(FloorConfig(), generation.seed)

    def test_golden_scenario(self):
        """seed AAAAAAAAAA on a 32x32 tile with 8 planks"""
        config = FloorConfig(width=32, height=32, nb_planks=8)
        generation = generate(config, GOLDEN_SEED)
        tile = generation.result
        colors = config.colors

        # Planks take the first 8 numbers of the stream
        reference = random.Random(GOLDEN_SEED)
        expected_colors = [colors.plank if reference.random() < 0.7 else colors.darker_plank
                           for _ in range(8)]
        assert [p.color for p in tile.planks] == expected_colors
        assert [p.y for p in tile.planks] == [0, 4, 8, 12, 16, 20, 24, 28]

        # First vertical outline comes from the ninth number, never adjusted
        first_x = math.floor(reference.random() * (26 - 5) + 5)
        vertical = tile.outlines[8:]
        assert vertical[0].start.x == first_x + 0.5

        assert len(tile.outlines) == 16
        assert tile.outlines[:8] == draw_horizontal_outlines(32, 32, 4, colors.outline)
        assert len(tile.intersections) % 2 == 0
        assert len(tile.intersections) <= 14

    @pytest.mark.parametrize("options", [
        {'width': 32, 'height': 32, 'nb_planks': 8},
        {'width': 32, 'height': 32, 'nb_planks': 8, 'outline_divisor': 8, 'connection_divisor': 4},
        {'width': 32, 'height': 32, 'nb_planks': 8, 'outline_divisor': 4, 'connection_divisor': 8},
        {'width': 48, 'height': 24, 'nb_planks': 4, 'outline_divisor': 5, 'connection_divisor': 3},
    ])
    @pytest.mark.parametrize("seed", [GOLDEN_SEED, "floor-42"])
    def test_full_command_list(self, options, seed):
        """Every command of every tile, compared with an independent replay"""
        config = FloorConfig(nb_variations=2, **options)
        generation = generate(config, seed)

        expected = replay_floor(
            seed, config.width, config.height, config.nb_planks,
            config.width // config.outline_divisor,
            config.width // config.connection_divisor,
            config.nb_variations, config.colors)
        assert [as_rows(tile) for tile in generation.tiles] == expected

    def test_divisors_are_not_interchangeable(self):
        """Outline gap and connection distance drive different parts of a tile"""
        config = FloorConfig(outline_divisor=8, connection_divisor=4, nb_variations=4)
        assert (config.min_outline_gap, config.connect_distance) == (4, 8)
        swapped = FloorConfig(outline_divisor=4, connection_divisor=8, nb_variations=4)

        tiles = generate(config, GOLDEN_SEED).tiles
        assert tiles != generate(swapped, GOLDEN_SEED).tiles

        for tile in tiles:
            for bar, stem in zip(tile.intersections[0::2], stems(tile)):
                center_x = stem.start.x - 0.5
                left = center_x - bar.start.x
                right = bar.end.x - center_x
                # At most one branch is stretched to a mark within
                # connect_distance, the other stays below gap / 2
                assert 0 <= left <= 8 and 0 <= right <= 8
                assert min(left, right) < 2

    def test_pipeline_replay(self):
        """The tiles are exactly the layers drawn in order from one stream"""
        config = FloorConfig(nb_variations=1)
        colors = config.colors
        rnd = SeededRandom(GOLDEN_SEED)

        planks = draw_planks(32, 32, 4, rnd, colors.plank, colors.darker_plank)
        horizontal = draw_horizontal_outlines(32, 32, 4, colors.outline)
        expected = []
        for _ in range(2):
            vertical, intersections = draw_vertical_outlines(32, 32, 4, 5, rnd, colors.outline)
            marks = draw_intersections(intersections[1:], 5, 5, 4, rnd, True, colors.intersection)
            expected.append(TileResult(planks, horizontal + vertical, marks))

        assert generate(config, GOLDEN_SEED).tiles == tuple(expected)

    def test_first_row_never_darkened(self):
        for seed in ["AAAAAAAAAA", "one", "two", "three"]:
            for tile in generate(FloorConfig(nb_variations=4), seed).tiles:
                assert all(stem.start.y != -1 for stem in stems(tile))

    def test_variation_independence(self):
        generation = generate(FloorConfig(nb_variations=2), GOLDEN_SEED)
        assert len(generation.tiles) == 3
        assert generation.result is generation.tiles[0]
        assert generation.variations == generation.tiles[1:]

        planks = {tile.planks for tile in generation.tiles}
        assert len(planks) == 1

        layouts = {(tile.outlines, tile.intersections) for tile in generation.tiles}
        assert len(layouts) == 3

    @pytest.mark.parametrize("width, outline_divisor", [
        (32, 3), (32, 4), (32, 6), (32, 8), (5, 2), (7, 3), (1, 2),
    ])
    def test_vertical_outlines_stay_on_tile(self, width, outline_divisor):
        config = FloorConfig(width=width, outline_divisor=outline_divisor, nb_variations=10)
        for seed in [GOLDEN_SEED, "one", "two", "three", "four"]:
            for tile in generate(config, seed).tiles:
                for line in tile.outlines[config.nb_planks:]:
                    assert 0 < line.start.x < width

    def test_tiles_cannot_be_changed(self):
        generation = generate(FloorConfig(nb_variations=2), GOLDEN_SEED)
        assert isinstance(generation.tiles, tuple)
        assert isinstance(generation.variations, tuple)
        with pytest.raises(AttributeError):
            generation.tiles.append(generation.result)
        assert len(generation.tiles) == 3

    def test_no_variations(self):
        generation = generate(FloorConfig(nb_variations=0), GOLDEN_SEED)
        assert len(generation.tiles) == 1
        assert generation.variations == ()

    def test_clamped_variations(self):
        config = FloorConfig.from_options({'nb_variations': 15})
        assert len(generate(config, GOLDEN_SEED).tiles) == 11

    def test_disabled_intersections_keep_layout(self):
        """Turning marks off only removes the marks"""
        enabled = generate(FloorConfig(nb_variations=3), GOLDEN_SEED)
        disabled = generate(FloorConfig(nb_variations=3, intersections_enabled=False), GOLDEN_SEED)
        for on, off in zip(enabled.tiles, disabled.tiles):
            assert on.planks == off.planks
            assert on.outlines == off.outlines
            assert off.intersections == ()

    def test_fractional_spacing(self):
        config = FloorConfig(height=32, nb_planks=6)
        planks = generate(config, GOLDEN_SEED).result.planks
        assert planks[0].y == 0
        assert planks[-1].y < 32
        assert planks[-1].y + config.plank_spacing >= 32 - 1e-9

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigError):
            generate(FloorConfig(nb_planks=0), GOLDEN_SEED)
