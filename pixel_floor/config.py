"""
Floor generation options.

FloorConfig is read once per generation request. Values that depend on
other options (plank spacing, outline gap, connection distance, colours)
are properties so they always follow the current width, height and
plank count.
"""

import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Tuple

from .geometry import is_hex_color, shade_color

# Tile size
DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 32

# Planks & outlines
DEFAULT_NB_PLANKS = 8
DEFAULT_OUTLINE_DIVISOR = 6
DEFAULT_CONNECTION_DIVISOR = 6

# Colours
DEFAULT_BASE_COLOR = "#96704A"
DEFAULT_SHADING_PERCENTAGE = -2
DEFAULT_MANUAL_COLORS = ("#96704A", "#916B44", "#815D34", "#73532E")

# Variations & preview
NB_VARIATIONS_MAX = 10
DEFAULT_NB_VARIATIONS = 1
DEFAULT_PREVIEW_SCALE = 5

LEADING_INT = re.compile(r'\s*[+-]?\d+')


class ConfigError(ValueError):
    """Options that would make generation meaningless or loop forever"""


@dataclass(frozen=True)
class ColorScheme:
    plank: str
    darker_plank: str
    outline: str
    intersection: str

    @classmethod
    def from_base_color(cls, base_color: str, shading_percentage: float) -> "ColorScheme":
        """Derive the four colours by darkening the base colour step by step"""
        plank = base_color
        darker_plank = shade_color(plank, shading_percentage)
        outline = shade_color(darker_plank, shading_percentage - 5)
        intersection = shade_color(outline, shading_percentage - 2)
        return cls(plank, darker_plank, outline, intersection)


def clamp_variations(nb_variations: int) -> int:
    return max(0, min(NB_VARIATIONS_MAX, nb_variations))


@dataclass(frozen=True)
class FloorConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    nb_planks: int = DEFAULT_NB_PLANKS
    outline_divisor: int = DEFAULT_OUTLINE_DIVISOR
    intersections_enabled: bool = True
    connection_divisor: int = DEFAULT_CONNECTION_DIVISOR
    nb_variations: int = DEFAULT_NB_VARIATIONS
    colors_generated: bool = True
    base_color: str = DEFAULT_BASE_COLOR
    shading_percentage: float = DEFAULT_SHADING_PERCENTAGE
    manual_colors: Tuple[str, str, str, str] = field(default=DEFAULT_MANUAL_COLORS)
    preview_scale: int = DEFAULT_PREVIEW_SCALE

    @property
    def plank_spacing(self) -> float:
        return self.height / self.nb_planks

    @property
    def min_outline_gap(self) -> int:
        """Smallest distance allowed between two consecutive vertical outlines"""
        return self.width // self.outline_divisor

    @property
    def connect_distance(self) -> int:
        """Intersections closer than this on one row get joined T-marks"""
        return self.width // self.connection_divisor

    @property
    def colors(self) -> ColorScheme:
        if self.colors_generated:
            return ColorScheme.from_base_color(self.base_color, self.shading_percentage)
        return ColorScheme(*self.manual_colors)

    def validate(self) -> "FloorConfig":
        """Raise ConfigError for options the generator cannot work with"""
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.nb_planks <= 0:
            raise ConfigError(f"Plank count must be positive, got {self.nb_planks}")
        # Non-positive spacing would never advance the row stepping loops
        if not self.plank_spacing > 0 or not math.isfinite(self.plank_spacing):
            raise ConfigError(f"Plank spacing must be positive, got {self.plank_spacing}")
        if self.outline_divisor <= 0:
            raise ConfigError(f"Outline spacing divisor must be positive, got {self.outline_divisor}")
        # Outlines are picked in [gap, width - 1 - gap) and pushed by at most
        # one gap, which only stays on the tile while that range is not inverted
        if self.width - 1 - 2 * self.min_outline_gap < 0:
            raise ConfigError(
                f"Outline gap {self.min_outline_gap} is too wide for a {self.width}px tile, "
                f"use a larger outline divisor than {self.outline_divisor}")
        if self.connection_divisor <= 0:
            raise ConfigError(
                f"Intersection connection divisor must be positive, got {self.connection_divisor}")
        if not 0 <= self.nb_variations <= NB_VARIATIONS_MAX:
            raise ConfigError(
                f"Variation count must be between 0 and {NB_VARIATIONS_MAX}, got {self.nb_variations}")
        if self.preview_scale <= 0:
            raise ConfigError(f"Preview scale must be positive, got {self.preview_scale}")

        if self.colors_generated:
            if not is_hex_color(self.base_color):
                raise ConfigError(f"Base colour must look like #RRGGBB, got {self.base_color!r}")
        else:
            if len(self.manual_colors) != 4:
                raise ConfigError(f"Expected 4 manual colours, got {len(self.manual_colors)}")
            for color in self.manual_colors:
                if not is_hex_color(color):
                    raise ConfigError(f"Manual colour must look like #RRGGBB, got {color!r}")

        return self

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "FloorConfig":
        """
        Build a config from form-like options, where numbers may arrive as
        strings. Missing keys keep their defaults. The variation count is
        clamped to [0, NB_VARIATIONS_MAX] instead of being rejected.

        Recognised keys: width, height, nb_planks, outline_divisor,
        intersections_enabled, connection_divisor, nb_variations,
        colors_generated, base_color, shading_percentage, manual_colors,
        preview_scale.
        """
        unknown = set(options) - {f.name for f in fields(cls)}
        if unknown:
            raise ConfigError(f"Unknown options: {', '.join(sorted(unknown))}")

        values = {}
        for key in ('width', 'height', 'nb_planks', 'outline_divisor',
                    'connection_divisor', 'nb_variations', 'preview_scale'):
            if key in options:
                values[key] = _parse_int(key, options[key])
        if 'shading_percentage' in options:
            values['shading_percentage'] = _parse_int('shading_percentage', options['shading_percentage'])
        for key in ('intersections_enabled', 'colors_generated'):
            if key in options:
                values[key] = _parse_bool(key, options[key])
        if 'base_color' in options:
            values['base_color'] = str(options['base_color'])
        if 'manual_colors' in options:
            values['manual_colors'] = tuple(str(c) for c in options['manual_colors'])

        if 'nb_variations' in values:
            values['nb_variations'] = clamp_variations(values['nb_variations'])

        return cls(**values).validate()


def _parse_int(key: str, value: Any) -> int:
    """
    Read a whole number the way form fields were read: the leading integer
    of a string counts ("32px" -> 32, "-2.5" -> -2) and floats are truncated.
    """
    if isinstance(value, bool):
        raise ConfigError(f"Option {key} must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        match = LEADING_INT.match(value)
        if match:
            return int(match.group(0))
    raise ConfigError(f"Option {key} must be a number, got {value!r}")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', '1', 'yes', 'on'):
        return True
    if isinstance(value, str) and value.lower() in ('false', '0', 'no', 'off'):
        return False
    raise ConfigError(f"Option {key} must be true or false, got {value!r}")
