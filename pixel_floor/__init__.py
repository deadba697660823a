"""
Procedural pixel-art wood plank floors.

    from pixel_floor import FloorConfig, generate, render_tile

    generation = generate(FloorConfig(nb_variations=2), seed="AAAAAAAAAA")
    render_tile(generation.result, 32, 32).save("floor.png")
"""

from .composer import GenerationResult, TileResult, compose_tile, generate
from .config import ColorScheme, ConfigError, FloorConfig
from .preview import compose_mosaic
from .random_source import SeededRandom, make_id
from .render import render_tile

__all__ = [
    'ColorScheme',
    'ConfigError',
    'FloorConfig',
    'GenerationResult',
    'SeededRandom',
    'TileResult',
    'compose_mosaic',
    'compose_tile',
    'generate',
    'make_id',
    'render_tile',
]
