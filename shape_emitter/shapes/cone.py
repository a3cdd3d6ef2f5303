"""
Cone Shape

Particles spawn on the base disc of a cone (XZ plane) and travel up the
cone's flank. The opening ``angle`` is the half angle at the rim; a
particle halfway to the rim leaves at half that angle, and one at the
very center goes straight up.
"""

import numpy as np
from dataclasses import dataclass

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


@dataclass
class Cone(BaseShape):
    """Cone opening along +Y from a base disc of ``radius``"""
    name = "cone"
    description = "Cone base disc, directed along the cone flank"

    angle: float = np.pi / 8
    radius: float = 1.0

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        azimuth = rng.uniform(0.0, 2 * np.pi)
        return self._particle(azimuth, rng, thickness, direction_mode)

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        azimuth = self._wrap(self._spread_parameter(spread, rng)) * 2 * np.pi
        return self._particle(azimuth, rng, thickness, direction_mode)

    def _particle(self, azimuth, rng, thickness, direction_mode) -> EmittedParticle:
        radial = Vec3.from_spherical(azimuth, 0.0)
        coef = self._thickness_coef(rng, thickness)
        position = radial * (self.radius * coef)

        if direction_mode.is_automatic:
            tilt = self.angle * coef
            direction = (Vec3.Y * np.cos(tilt) + radial * np.sin(tilt)).normalize_or(Vec3.Y)
        else:
            direction = direction_mode.fixed

        return EmittedParticle(position=position, direction=direction)
