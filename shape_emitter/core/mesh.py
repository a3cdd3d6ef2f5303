"""
Mesh Data

Minimal vertex-attribute container for mesh-based emission shapes.
Only what sampling needs lives here: named attribute buffers and a
default cube. Loading meshes from files is left to the host.
"""

import logging
import numpy as np
from typing import Dict, Iterable, List, Optional

from .errors import ShapeConfigurationError


logger = logging.getLogger(__name__)


class Mesh:
    """
    Named vertex buffers keyed by attribute name.

    Example:
        mesh = Mesh.from_positions([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        mesh.count_vertices()  # 3
    """

    ATTRIBUTE_POSITION = "Vertex_Position"
    ATTRIBUTE_NORMAL = "Vertex_Normal"

    def __init__(self, attributes: Optional[Dict[str, np.ndarray]] = None):
        self._attributes: Dict[str, np.ndarray] = {}
        for name, values in (attributes or {}).items():
            self.insert_attribute(name, values)

    def insert_attribute(self, name: str, values) -> None:
        """Store a buffer, converted to a float array"""
        self._attributes[name] = np.asarray(values, dtype=np.float64)

    def remove_attribute(self, name: str) -> Optional[np.ndarray]:
        return self._attributes.pop(name, None)

    def attribute(self, name: str) -> Optional[np.ndarray]:
        return self._attributes.get(name)

    @property
    def attribute_names(self) -> List[str]:
        return list(self._attributes.keys())

    def count_vertices(self) -> int:
        """
        Vertex count, taken from the shortest buffer.

        A mesh without any buffers has zero vertices.
        """
        if not self._attributes:
            return 0
        return min(len(values) for values in self._attributes.values())

    def positions(self) -> np.ndarray:
        """
        Position buffer as an (n, 3) array.

        Raises:
            ShapeConfigurationError: if the buffer is missing or not (n, 3)
        """
        positions = self.attribute(self.ATTRIBUTE_POSITION)
        if positions is None:
            raise ShapeConfigurationError(
                f"No vertex positions set for mesh (attributes: {self.attribute_names})"
            )
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ShapeConfigurationError(
                f"Expected a mesh with (n, 3) float positions, got shape {positions.shape}"
            )
        return positions

    @classmethod
    def from_positions(cls, points: Iterable) -> 'Mesh':
        """
        Mesh with only a position buffer.

        Raises:
            ShapeConfigurationError: if the points are not xyz triples
        """
        try:
            points = np.asarray(list(points), dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ShapeConfigurationError(f"Vertex positions must be xyz triples: {e}") from e

        if points.size == 0:
            points = points.reshape(0, 3)
        elif points.ndim != 2 or points.shape[1] != 3:
            raise ShapeConfigurationError(
                f"Expected a mesh with (n, 3) float positions, got shape {points.shape}"
            )
        return cls({cls.ATTRIBUTE_POSITION: points})

    @classmethod
    def cube(cls, size: float = 1.0) -> 'Mesh':
        """
        Axis-aligned cube centered on the origin.

        Built the way render meshes are: 6 faces, 4 vertices each, with
        per-face normals, so corners appear three times in the buffer.
        """
        h = size / 2.0
        faces = [
            # (normal, four corners)
            ((0, 0, 1), [(-h, -h, h), (h, -h, h), (h, h, h), (-h, h, h)]),
            ((0, 0, -1), [(-h, h, -h), (h, h, -h), (h, -h, -h), (-h, -h, -h)]),
            ((1, 0, 0), [(h, -h, -h), (h, h, -h), (h, h, h), (h, -h, h)]),
            ((-1, 0, 0), [(-h, -h, h), (-h, h, h), (-h, h, -h), (-h, -h, -h)]),
            ((0, 1, 0), [(h, h, -h), (-h, h, -h), (-h, h, h), (h, h, h)]),
            ((0, -1, 0), [(h, -h, h), (-h, -h, h), (-h, -h, -h), (h, -h, -h)]),
        ]
        positions = []
        normals = []
        for normal, corners in faces:
            positions.extend(corners)
            normals.extend([normal] * len(corners))

        logger.debug("Built cube mesh (size=%s, %d vertices)", size, len(positions))
        return cls({
            cls.ATTRIBUTE_POSITION: positions,
            cls.ATTRIBUTE_NORMAL: normals,
        })

    def __repr__(self) -> str:
        return f"Mesh(vertices={self.count_vertices()}, attributes={self.attribute_names})"
