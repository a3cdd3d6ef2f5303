"""
Shape Emitter - Procedural particle emission from geometric shapes
"""

import logging
from typing import List, Optional

from .core import (
    Vec3, Mesh, EmittedParticle,
    EmitterShape, EmitterDirectionMode, EmitterDirectionParams,
    EmissionMode, EmissionModeKind, EmissionSpread, SpreadLoopMode,
    EmitterError, ShapeConfigurationError, SpreadNotSupportedError, PresetError,
    build_emitter, make_rng,
)
from .shapes import SHAPES, get_shape, create_shape

__version__ = "0.1.0"
__all__ = [
    'Vec3',
    'Mesh',
    'EmittedParticle',
    'EmitterShape',
    'EmitterDirectionMode',
    'EmitterDirectionParams',
    'EmissionMode',
    'EmissionModeKind',
    'EmissionSpread',
    'SpreadLoopMode',
    'EmitterError',
    'ShapeConfigurationError',
    'SpreadNotSupportedError',
    'PresetError',
    'SHAPES',
    'get_shape',
    'create_shape',
    'emit',
]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def emit(preset: str, count: int = 1, seed: Optional[int] = None) -> List[EmittedParticle]:
    """
    Emit particles from a named preset.

    Args:
        preset: Preset name (built-in or user preset)
        count: Number of particles
        seed: Random seed for a reproducible sequence

    Returns:
        List of emitted particles
    """
    emitter = build_emitter(preset)
    return emitter.emit(count, make_rng(seed))
