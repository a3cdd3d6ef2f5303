"""
Circle Shape - particles on a flat ring in the XZ plane
"""

import numpy as np
from dataclasses import dataclass

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


@dataclass
class Circle(BaseShape):
    """Circle of ``radius`` around the Y axis; thickness fills it toward the center"""
    name = "circle"
    description = "Circle edge or disc in the XZ plane, directed away from the center"

    radius: float = 1.0

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        angle = rng.uniform(0.0, 2 * np.pi)
        return self._particle(angle, rng, thickness, direction_mode)

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        angle = self._wrap(self._spread_parameter(spread, rng)) * 2 * np.pi
        return self._particle(angle, rng, thickness, direction_mode)

    def _particle(self, angle, rng, thickness, direction_mode) -> EmittedParticle:
        point = Vec3.from_spherical(angle, 0.0, self.radius)
        coef = self._thickness_coef(rng, thickness)
        return EmittedParticle(
            position=point * coef,
            direction=self._outward(point, Vec3.ZERO, direction_mode),
        )
