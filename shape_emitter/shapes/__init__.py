"""
Emission Shapes - geometry that particles are sampled from
"""

from typing import Any, Dict, Optional, Union

from .base import BaseShape
from .box import Box
from .circle import Circle
from .cone import Cone
from .convex_mesh import ConvexMesh
from .edge import Edge
from .sphere import Sphere
from ..core.errors import PresetError


# Closed set of supported shapes
Shape = Union[ConvexMesh, Sphere, Circle, Cone, Edge, Box]

# Shape registry for easy access
SHAPES = {
    'convex_mesh': ConvexMesh,
    'mesh': ConvexMesh,  # Alias
    'sphere': Sphere,
    'ball': Sphere,  # Alias
    'circle': Circle,
    'ring': Circle,  # Alias
    'cone': Cone,
    'edge': Edge,
    'line': Edge,  # Alias
    'box': Box,
    'cube': Box,  # Alias
}


def get_shape(name: str) -> type:
    """Get shape class by name"""
    name = name.lower()
    if name not in SHAPES:
        available = sorted({cls.name for cls in SHAPES.values()})
        raise PresetError(f"Unknown shape: {name}. Available: {available}")
    return SHAPES[name]


def create_shape(name: str, params: Optional[Dict[str, Any]] = None) -> BaseShape:
    """Instantiate a registered shape from plain parameters"""
    return get_shape(name).from_params(params or {})


__all__ = [
    'BaseShape',
    'Shape',
    'ConvexMesh',
    'Sphere',
    'Circle',
    'Cone',
    'Edge',
    'Box',
    'SHAPES',
    'get_shape',
    'create_shape',
]
