"""
Vector Utilities

Small 3D vector value type used for particle positions and directions.
Normalization never raises: near-zero vectors report ``None`` from
``try_normalize`` so callers can pick their own fallback (usually +Y).
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


# Lengths below this are treated as zero when normalizing
NORMALIZE_EPSILON = 1e-10


@dataclass(frozen=True)
class Vec3:
    """3D vector with the handful of operations emission needs"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vec3':
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> 'Vec3':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vec3':
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar) if scalar != 0 else Vec3()

    def __neg__(self) -> 'Vec3':
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @property
    def length(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def try_normalize(self) -> Optional['Vec3']:
        """Unit vector in the same direction, or None when the length is ~zero"""
        l = self.length
        if not np.isfinite(l) or l <= NORMALIZE_EPSILON:
            return None
        return Vec3(self.x / l, self.y / l, self.z / l)

    def normalize_or(self, fallback: 'Vec3') -> 'Vec3':
        normalized = self.try_normalize()
        return fallback if normalized is None else normalized

    def dot(self, other: 'Vec3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vec3') -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def lerp(self, other: 'Vec3', t: float) -> 'Vec3':
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def is_close(self, other: 'Vec3', tolerance: float = 1e-6) -> bool:
        return (self - other).length <= tolerance

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @staticmethod
    def from_iterable(values: Iterable[float]) -> 'Vec3':
        x, y, z = (float(v) for v in values)
        return Vec3(x, y, z)

    @staticmethod
    def from_spherical(azimuth: float, elevation: float, length: float = 1.0) -> 'Vec3':
        """Y-up spherical coordinates: azimuth around Y, elevation from the XZ plane"""
        cos_el = np.cos(elevation)
        return Vec3(
            float(cos_el * np.cos(azimuth) * length),
            float(np.sin(elevation) * length),
            float(cos_el * np.sin(azimuth) * length),
        )


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)
