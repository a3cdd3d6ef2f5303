"""
Box Shape - particles on or inside an axis-aligned box

Random placement only: there is no natural ordering of a box surface to
spread emission over, so spread mode is rejected.
"""

from dataclasses import dataclass, field

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.particle import EmittedParticle
from ..core.vector import Vec3


@dataclass
class Box(BaseShape):
    """Box centered on the origin with full side lengths ``extents``"""
    name = "box"
    description = "Axis-aligned box surface or volume, directed away from the center"
    supports_spread = False

    extents: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        coords = [float(rng.uniform(-1.0, 1.0)) for _ in range(3)]
        # Push one axis onto a face so the point lies on the surface
        axis = int(rng.integers(0, 3))
        coords[axis] = 1.0 if rng.integers(0, 2) else -1.0

        half = self.extents * 0.5
        point = Vec3(coords[0] * half.x, coords[1] * half.y, coords[2] * half.z)
        coef = self._thickness_coef(rng, thickness)
        return EmittedParticle(
            position=point * coef,
            direction=self._outward(point, Vec3.ZERO, direction_mode),
        )
