"""
Emitter Presets Library - Pre-configured emission setups
Lets users build a complete emitter from a single name
"""

import copy
import logging
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .emitter import EmitterShape
from .errors import PresetError
from ..shapes import get_shape


logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class EmitterPreset:
    """A single emitter preset configuration"""

    name: str
    description: str = ""

    # Geometry
    shape: str = "convex_mesh"
    shape_params: Dict[str, Any] = field(default_factory=dict)
    thickness: float = 1.0

    # Direction: {mode, fixed, randomize, spherize}
    direction: Dict[str, Any] = field(default_factory=dict)

    # Emission mode: "random" or "spread"
    mode: str = "random"
    # Spread settings: {amount, loop_mode, uniform}
    spread: Dict[str, Any] = field(default_factory=dict)

    # Tags for organization
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return {
            'name': self.name,
            'description': self.description,
            'shape': self.shape,
            'shape_params': copy.deepcopy(self.shape_params),
            'thickness': self.thickness,
            'direction': copy.deepcopy(self.direction),
            'mode': self.mode,
            'spread': copy.deepcopy(self.spread),
            'tags': list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EmitterPreset':
        """Create from dictionary"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: copy.deepcopy(v) for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_emitter(cls, name: str, emitter: EmitterShape, description: str = "", tags: Optional[List[str]] = None) -> 'EmitterPreset':
        """Capture an emitter's configuration (not its running spread index)"""
        data = emitter.to_dict()
        return cls(
            name=name,
            description=description,
            shape=data['shape'],
            shape_params=data['shape_params'],
            thickness=data['thickness'],
            direction=data['direction'],
            mode=data['mode']['kind'],
            spread=data['mode'].get('spread', {}),
            tags=list(tags or []),
        )

    def build(self) -> EmitterShape:
        """Create a fresh emitter from this preset"""
        mode: Dict[str, Any] = {'kind': self.mode}
        if self.mode == 'spread':
            mode['spread'] = self.spread
        emitter = EmitterShape.from_dict({
            'shape': self.shape,
            'shape_params': self.shape_params,
            'thickness': self.thickness,
            'direction': self.direction,
            'mode': mode,
        })
        emitter.validate()
        return emitter


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "fountain": {
        "name": "fountain",
        "description": "Narrow upward jet from a small cone",
        "shape": "cone",
        "shape_params": {"angle": 0.3, "radius": 0.2},
        "thickness": 1.0,
        "direction": {"randomize": 0.05},
        "tags": ["water", "jet"],
    },

    "explosion": {
        "name": "explosion",
        "description": "Radial burst from the whole volume of a sphere",
        "shape": "sphere",
        "shape_params": {"radius": 0.5},
        "thickness": 1.0,
        "direction": {"randomize": 0.2, "spherize": 0.5},
        "tags": ["burst", "combat"],
    },

    "ring_spread": {
        "name": "ring_spread",
        "description": "Particles marching around a circle in even steps",
        "shape": "circle",
        "shape_params": {"radius": 1.0},
        "thickness": 0.0,
        "mode": "spread",
        "spread": {"amount": 0.05, "loop_mode": "loop", "uniform": True},
        "tags": ["ring", "spread", "magic"],
    },

    "ping_pong_arc": {
        "name": "ping_pong_arc",
        "description": "Sweeps back and forth along a line, like a sprinkler",
        "shape": "edge",
        "shape_params": {"start": [-1.0, 0.0, 0.0], "end": [1.0, 0.0, 0.0]},
        "mode": "spread",
        "spread": {"amount": 0.1, "loop_mode": "ping_pong"},
        "direction": {"spherize": 0.3},
        "tags": ["spread", "sweep"],
    },

    "cube_burst": {
        "name": "cube_burst",
        "description": "Shell of particles leaving the faces of a box",
        "shape": "box",
        "shape_params": {"extents": [2.0, 2.0, 2.0]},
        "thickness": 0.0,
        "tags": ["burst", "box"],
    },

    "edge_rain": {
        "name": "edge_rain",
        "description": "Particles falling straight down from a line",
        "shape": "edge",
        "shape_params": {"start": [-2.0, 3.0, 0.0], "end": [2.0, 3.0, 0.0]},
        "direction": {"mode": "fixed", "fixed": [0.0, -1.0, 0.0]},
        "tags": ["environment", "rain"],
    },

    "crystal_shell": {
        "name": "crystal_shell",
        "description": "Sparks leaving the corners of a cube mesh, stepping vertex by vertex",
        "shape": "convex_mesh",
        "shape_params": {"size": 1.0},
        "thickness": 0.0,
        "mode": "spread",
        "spread": {"amount": 0.125, "loop_mode": "ping_pong", "uniform": True},
        "direction": {"randomize": 0.1},
        "tags": ["magic", "crystal", "spread"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Built-in presets plus user presets stored as YAML files.

    A user file holds either one preset, named by its ``name`` key (or the
    file stem when it has none), or several presets under a ``presets:``
    mapping keyed by name. The manager remembers which file each user
    preset came from, so deleting or re-saving a preset edits that file.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Args:
            user_presets_dir: Directory for user presets (default: ~/.shape-emitter/presets).
                Only created when a preset is saved.
        """
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.shape-emitter' / 'presets')

        self._builtin: Dict[str, EmitterPreset] = {
            name: EmitterPreset.from_dict(data) for name, data in BUILTIN_PRESETS.items()
        }
        self._user: Dict[str, EmitterPreset] = {}
        self._sources: Dict[str, Path] = {}

        self._load_user_presets()

    # ------------------------------------------------------------------------
    # User files
    # ------------------------------------------------------------------------

    def _load_user_presets(self) -> None:
        """Load every *.yaml file; unusable files and entries are skipped with a warning"""
        if not self.user_presets_dir.is_dir():
            return
        for path in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                data = self._read_file(path)
            except (OSError, yaml.YAMLError, ValueError) as e:
                logger.warning("Skipping preset file %s: %s", path, e)
                continue

            for name, entry in self._entries(path, data).items():
                self._user[name] = EmitterPreset.from_dict({**entry, 'name': name})
                self._sources[name] = path

        logger.debug("Loaded %d user presets from %s", len(self._user), self.user_presets_dir)

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        if 'presets' in data and not isinstance(data['presets'], dict):
            raise ValueError("'presets' must map preset names to settings")
        return data

    @staticmethod
    def _entries(path: Path, data: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        """Preset settings in one parsed file, keyed by preset name"""
        if 'presets' not in data:
            return {str(data.get('name') or path.stem): data}

        entries = {}
        for name, entry in data['presets'].items():
            if isinstance(entry, dict):
                entries[str(name)] = entry
            else:
                logger.warning("Skipping preset '%s' in %s: expected a mapping", name, path)
        return entries

    def _detach(self, name: str) -> None:
        """Remove a user preset from the file it was loaded from or saved to"""
        path = self._sources.pop(name, None)
        if path is None or not path.exists():
            return

        data = self._read_file(path)
        presets = data.get('presets')
        if presets is None:
            path.unlink()
            return

        presets.pop(name, None)
        if presets or len(data) > 1:
            with open(path, 'w') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            path.unlink()

    def save_preset(self, preset: EmitterPreset, filename: Optional[str] = None) -> Path:
        """
        Write a user preset to its own YAML file (``<name>.yaml`` by default).

        A preset saved earlier under another file is moved, so only one
        file defines each name.

        Returns:
            Path to saved file
        """
        filename = filename or preset.name
        if not filename.endswith('.yaml'):
            filename += '.yaml'
        path = self.user_presets_dir / filename

        others = [n for n, source in self._sources.items() if source == path and n != preset.name]
        if others:
            raise PresetError(f"{path} already holds presets {sorted(others)}")

        if self._sources.get(preset.name, path) != path:
            self._detach(preset.name)

        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.safe_dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        self._sources[preset.name] = path
        logger.info("Saved preset '%s' to %s", preset.name, path)
        return path

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset, editing or removing the file that defines it.

        Returns:
            True if deleted, False for unknown and built-in presets
        """
        if name not in self._user:
            return False
        self._detach(name)
        del self._user[name]
        logger.info("Deleted preset '%s'", name)
        return True

    # ------------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------------

    def get(self, name: str) -> Optional[EmitterPreset]:
        """User presets shadow built-ins of the same name"""
        return self._user.get(name, self._builtin.get(name))

    def require(self, name: str) -> EmitterPreset:
        """Like ``get`` but raises PresetError for unknown names"""
        preset = self.get(name)
        if preset is None:
            raise PresetError(f"Unknown preset '{name}'. Available: {', '.join(self.list_all())}")
        return preset

    def exists(self, name: str) -> bool:
        return self.get(name) is not None

    def source_of(self, name: str) -> Optional[Path]:
        """File a user preset lives in (None for built-ins)"""
        return self._sources.get(name)

    def find(self, tag: Optional[str] = None, shape: Optional[str] = None,
             query: Optional[str] = None) -> List[str]:
        """
        Names of presets matching every given filter.

        ``tag`` matches a tag exactly, ``shape`` matches by shape class so
        aliases agree, and ``query`` is a substring of the name,
        description or any tag. All comparisons ignore case.
        """
        shape_cls = get_shape(shape) if shape else None
        tag = tag.lower() if tag else None
        query = query.lower() if query else None

        names = []
        for name, preset in {**self._builtin, **self._user}.items():
            tags = [t.lower() for t in preset.tags]
            if tag is not None and tag not in tags:
                continue
            if shape_cls is not None and get_shape(preset.shape) is not shape_cls:
                continue
            if query is not None:
                haystack = [name.lower(), preset.description.lower()] + tags
                if not any(query in text for text in haystack):
                    continue
            names.append(name)
        return sorted(names)

    def list_all(self) -> List[str]:
        return self.find()

    def list_by_tag(self, tag: str) -> List[str]:
        return self.find(tag=tag)

    def list_by_shape(self, shape: str) -> List[str]:
        return self.find(shape=shape)

    def search(self, query: str) -> List[str]:
        return self.find(query=query)


# ============================================================================
# Shared manager
# ============================================================================

_shared_manager: Optional[PresetManager] = None


def get_preset_manager(user_presets_dir: Optional[Path] = None) -> PresetManager:
    """
    Shared manager, rebuilt when a different presets directory is asked for.

    Without ``user_presets_dir`` the current shared manager is reused.
    """
    global _shared_manager
    wanted = Path(user_presets_dir) if user_presets_dir is not None else None
    if _shared_manager is None or (wanted is not None and _shared_manager.user_presets_dir != wanted):
        _shared_manager = PresetManager(wanted)
    return _shared_manager


def get_preset(name: str) -> Optional[EmitterPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None, shape: Optional[str] = None) -> List[str]:
    """Preset names, filtered by tag and/or shape"""
    return get_preset_manager().find(tag=tag, shape=shape)


def build_emitter(name: str) -> EmitterShape:
    """Build a fresh emitter from a named preset"""
    return get_preset_manager().require(name).build()
