"""
Shape Emitter - Core
"""

from .vector import Vec3
from .errors import EmitterError, ShapeConfigurationError, SpreadNotSupportedError, PresetError
from .mesh import Mesh
from .particle import EmittedParticle
from .spread import (
    SpreadLoopMode, SpreadState, EmissionSpread,
    EmissionModeKind, EmissionMode,
)
from .direction import (
    DirectionModeKind, EmitterDirectionMode, EmitterDirectionParams,
    random_direction, compose_direction,
)
from .emitter import EmitterShape
from .presets import (
    # Data structures
    EmitterPreset,
    # Manager
    PresetManager,
    # Convenience
    get_preset_manager, get_preset, list_presets, build_emitter,
    # Built-in presets dict
    BUILTIN_PRESETS,
)
from .utils import Settings, load_settings, setup_logging, make_rng

__all__ = [
    'Vec3',
    'EmitterError', 'ShapeConfigurationError', 'SpreadNotSupportedError', 'PresetError',
    'Mesh',
    'EmittedParticle',
    'SpreadLoopMode', 'SpreadState', 'EmissionSpread',
    'EmissionModeKind', 'EmissionMode',
    'DirectionModeKind', 'EmitterDirectionMode', 'EmitterDirectionParams',
    'random_direction', 'compose_direction',
    'EmitterShape',
    'EmitterPreset', 'PresetManager',
    'get_preset_manager', 'get_preset', 'list_presets', 'build_emitter',
    'BUILTIN_PRESETS',
    'Settings', 'load_settings', 'setup_logging', 'make_rng',
]
