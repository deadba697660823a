#!/usr/bin/env python3
"""
Pixel-art wood plank floor generator.

Usage:
    # New floor from a fresh random seed
    pixel-floor generate --output-dir out

    # Same floor, new options (e.g. more variations, other colours)
    pixel-floor generate --seed Ab3dE9xQ1z --variations 4 --base-color "#7A5C3E"

    # Show the colours a base colour and shading produce
    pixel-floor colors --base-color "#96704A" --shading -2
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .composer import generate
from .config import NB_VARIATIONS_MAX, ColorScheme, ConfigError, FloorConfig
from .export import export_preview, export_result, export_variations
from .geometry import is_hex_color
from .preview import compose_mosaic

EXPORT_CHOICES = ('result', 'variations', 'preview', 'all')


def load_options(path: str) -> Dict[str, Any]:
    """Read a JSON object of options, the same keys FloorConfig.from_options takes"""
    try:
        with open(path) as f:
            options = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(options, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return options


def options_from_args(args) -> Dict[str, Any]:
    """Config file options, overridden by whatever was given on the command line"""
    options = load_options(args.config) if args.config else {}

    flags = {
        'width': args.width,
        'height': args.height,
        'nb_planks': args.planks,
        'outline_divisor': args.outline_divisor,
        'connection_divisor': args.connection_divisor,
        'nb_variations': args.variations,
        'base_color': args.base_color,
        'shading_percentage': args.shading,
        'preview_scale': args.preview_scale,
    }
    options.update({key: value for key, value in flags.items() if value is not None})

    if args.no_intersections:
        options['intersections_enabled'] = False
    if args.manual_colors:
        options['colors_generated'] = False
        options['manual_colors'] = args.manual_colors
    elif args.base_color is not None:
        options['colors_generated'] = True

    return options


def generate_command(args):
    """Generate a floor and save the requested images"""
    config = FloorConfig.from_options(options_from_args(args))
    if args.variations is not None and args.variations > NB_VARIATIONS_MAX:
        log(args, f"Variations capped at {NB_VARIATIONS_MAX} (asked for {args.variations})")

    generation = generate(config, args.seed)
    output_dir = Path(args.output_dir)

    log(args, f"=== Generating {config.width}x{config.height} plank floor ===")
    log(args, f"Seed: {generation.seed}")
    log(args, f"Planks: {config.nb_planks} ({config.plank_spacing:g}px each)")
    log(args, f"Variations: {config.nb_variations}")
    log(args, f"Intersections: {'on' if config.intersections_enabled else 'off'}")
    log(args, "")

    written = []
    if args.export in ('result', 'all'):
        log(args, "Saving result tile...")
        written.append(export_result(generation, output_dir))
    if args.export in ('variations', 'all') and generation.variations:
        log(args, "Saving variations...")
        written.extend(export_variations(generation, output_dir))
    if args.export in ('preview', 'all'):
        log(args, f"Building {config.preview_scale}x{config.preview_scale} preview...")
        mosaic = compose_mosaic(generation.tiles, config.width, config.height,
                                config.preview_scale)
        written.append(export_preview(generation, output_dir, mosaic))

    for path in written:
        log(args, f"  {path}")
    log(args, "")
    log(args, f"✓ Generated floor {generation.seed} ({len(written)} images in {output_dir})")

    # The seed is the one thing needed to rebuild this floor
    if args.quiet:
        print(generation.seed)


def colors_command(args):
    """Print the colour scheme derived from a base colour"""
    if not is_hex_color(args.base_color):
        raise ConfigError(f"Base colour must look like #RRGGBB, got {args.base_color!r}")

    scheme = ColorScheme.from_base_color(args.base_color, args.shading)
    print(f"plank:        {scheme.plank}")
    print(f"darker plank: {scheme.darker_plank}")
    print(f"outline:      {scheme.outline}")
    print(f"intersection: {scheme.intersection}")


def log(args, message: str):
    if not args.quiet:
        print(message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate tileable pixel-art wood plank floors")
    subparsers = parser.add_subparsers(dest='command', required=True)

    gen = subparsers.add_parser('generate', help='Generate a floor tile, its variations and a preview')
    gen.add_argument('--seed', type=str, default=None,
                     help='Seed to rebuild a floor (default: new random 10 character seed)')
    gen.add_argument('--config', type=str, default=None, help='JSON file with options')
    gen.add_argument('--width', type=int, default=None, help='Tile width in pixels (default 32)')
    gen.add_argument('--height', type=int, default=None, help='Tile height in pixels (default 32)')
    gen.add_argument('--planks', type=int, default=None, help='Number of planks (default 8)')
    gen.add_argument('--outline-divisor', type=int, default=None,
                     help='Minimum outline gap is width / divisor (default 6)')
    gen.add_argument('--no-intersections', action='store_true', help='Do not darken intersections')
    gen.add_argument('--connection-divisor', type=int, default=None,
                     help='Intersections closer than width / divisor get connected (default 6)')
    gen.add_argument('--variations', type=int, default=None,
                     help=f'Number of variations, at most {NB_VARIATIONS_MAX} (default 1)')
    gen.add_argument('--base-color', type=str, default=None,
                     help='Base plank colour the other colours are shaded from (default #96704A)')
    gen.add_argument('--shading', type=int, default=None,
                     help='Shading percentage between generated colours (default -2)')
    gen.add_argument('--manual-colors', nargs=4, default=None,
                     metavar=('PLANK', 'DARKER', 'OUTLINE', 'INTERSECTION'),
                     help='Use these four colours instead of generating them')
    gen.add_argument('--preview-scale', type=int, default=None,
                     help='Preview size in tiles per side (default 5)')
    gen.add_argument('--output-dir', type=str, default='.', help='Output directory')
    gen.add_argument('--export', choices=EXPORT_CHOICES, default='all', help='Images to save')
    gen.add_argument('--quiet', action='store_true', help='Only print the seed')

    col = subparsers.add_parser('colors', help='Show the colours generated from a base colour')
    col.add_argument('--base-color', type=str, default='#96704A', help='Base plank colour')
    col.add_argument('--shading', type=int, default=-2, help='Shading percentage')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'generate':
            generate_command(args)
        elif args.command == 'colors':
            colors_command(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
