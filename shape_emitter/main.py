#!/usr/bin/env python
"""
Shape Emitter CLI - Sample particles from emission shapes

Usage:
    python -m shape_emitter.main [options]

Examples:
    python -m shape_emitter.main --preset explosion --count 5
    python -m shape_emitter.main --shape sphere --thickness 0 --spherize 0.5
    python -m shape_emitter.main --shape circle --spread 0.1 --ping-pong --uniform
    python -m shape_emitter.main --list-presets
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .core import (
    EmissionModeKind, EmissionSpread, EmitterDirectionMode, EmitterError,
    SpreadLoopMode, Vec3, get_preset_manager, load_settings, make_rng, setup_logging,
)
from .core.emitter import EmitterShape
from .shapes import SHAPES, create_shape


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sample particle positions and directions from emission shapes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Available Shapes:
  convex_mesh - Vertices of a convex mesh (default unit cube)
  sphere      - Sphere surface or volume
  circle      - Circle edge or disc in the XZ plane
  cone        - Cone base disc, directed along the flank
  edge        - Line segment, directed along +Y
  box         - Axis-aligned box (random emission only)

Examples:
  %(prog)s --preset fountain --count 10
  %(prog)s --shape sphere --thickness 0 --randomize 0.3 --seed 7
  %(prog)s --shape circle --spread 0.125 --uniform --format json
"""
    )

    parser.add_argument('-p', '--preset', type=str, default=None,
                        help='Start from a named preset')
    parser.add_argument('--shape', type=str, default=None,
                        choices=sorted(SHAPES.keys()),
                        help='Emission shape (default: convex_mesh, or the preset shape)')
    parser.add_argument('-n', '--count', type=int, default=10,
                        help='Number of particles to emit (default: 10)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for a reproducible sequence')
    parser.add_argument('-t', '--thickness', type=float, default=None,
                        help='Emitting proportion of the volume 0.0-1.0 (0 = surface only)')
    parser.add_argument('--randomize', type=float, default=None,
                        help='Direction randomization 0.0-1.0')
    parser.add_argument('--spherize', type=float, default=None,
                        help='Direction spherization 0.0-1.0')
    parser.add_argument('--direction', type=float, nargs=3, default=None,
                        metavar=('X', 'Y', 'Z'),
                        help='Fixed emission direction instead of the shape direction')
    parser.add_argument('--spread', type=float, default=None, metavar='AMOUNT',
                        help='Use spread emission, stepping AMOUNT (0.0-1.0) per particle')
    parser.add_argument('--ping-pong', action='store_true',
                        help='Spread back and forth instead of looping')
    parser.add_argument('--uniform', action='store_true',
                        help='Place spread particles evenly instead of jittering')
    parser.add_argument('--format', type=str, default='table', choices=['table', 'json'],
                        help='Output format (default: table)')
    parser.add_argument('--list-presets', action='store_true',
                        help='List available presets and exit')
    parser.add_argument('--list-shapes', action='store_true',
                        help='List available shapes and exit')
    parser.add_argument('-c', '--config', type=str, default=None,
                        help='YAML settings file (logging, seed, presets_dir)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose (DEBUG) logging')
    return parser


def build_emitter_from_args(args: argparse.Namespace, manager) -> EmitterShape:
    """Preset (if any) first, then command line overrides"""
    if args.preset:
        emitter = manager.require(args.preset).build()
    else:
        emitter = EmitterShape()

    if args.shape:
        emitter.shape = create_shape(args.shape)
    if args.thickness is not None:
        emitter.thickness = args.thickness
    if args.randomize is not None:
        emitter.direction_params.randomize_direction = args.randomize
    if args.spherize is not None:
        emitter.direction_params.spherize_direction = args.spherize
    if args.direction is not None:
        emitter.direction_params.base_mode = EmitterDirectionMode.fixed_direction(
            Vec3.from_iterable(args.direction)
        )
    if args.spread is not None:
        loop_mode = SpreadLoopMode.PING_PONG if args.ping_pong else SpreadLoopMode.LOOP
        emitter.set_mode(
            EmissionModeKind.SPREAD,
            EmissionSpread(amount=args.spread, loop_mode=loop_mode, uniform=args.uniform),
        )

    emitter.validate()
    return emitter


def format_table(particles) -> str:
    lines = [f"{'#':>4}  {'position':<32}  {'direction':<32}"]
    for i, particle in enumerate(particles):
        pos = ', '.join(f"{v:8.4f}" for v in particle.position)
        dir_ = ', '.join(f"{v:8.4f}" for v in particle.direction)
        lines.append(f"{i:>4}  {pos:<32}  {dir_:<32}")
    return '\n'.join(lines)


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = None
    if args.config:
        try:
            settings = load_settings(args.config)
        except (OSError, ValueError) as e:
            print(f"Error: Could not load settings: {e}")
            sys.exit(1)

    log_config = dict(settings.logging) if settings else {}
    if args.verbose:
        log_config['level'] = 'DEBUG'
    setup_logging(log_config)

    manager = get_preset_manager(settings.presets_dir if settings else None)

    if args.list_presets:
        print("Available Presets:")
        for name in manager.list_all():
            preset = manager.get(name)
            print(f"  {name:<16} [{preset.shape:<11}] - {preset.description}")
        print(f"\nTotal: {len(manager.list_all())} presets")
        sys.exit(0)

    if args.list_shapes:
        print("Available Shapes:")
        for name, shape_cls in sorted(SHAPES.items()):
            spread = "random, spread" if shape_cls.supports_spread else "random"
            print(f"  {name:<12} ({spread}) - {shape_cls.description}")
        sys.exit(0)

    if args.count < 0:
        print("Error: --count must be non-negative")
        sys.exit(1)

    try:
        emitter = build_emitter_from_args(args, manager)
        seed = args.seed if args.seed is not None else (settings.seed if settings else None)
        particles = emitter.emit(args.count, make_rng(seed))
    except (EmitterError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            logger.exception("Emission failed")
        sys.exit(1)

    if args.format == 'json':
        print(json.dumps([p.to_dict() for p in particles], indent=2))
    else:
        print(format_table(particles))


if __name__ == '__main__':
    main()
