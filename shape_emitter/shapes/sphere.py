"""
Sphere Shape - particles on or inside a sphere, directed outward
"""

import numpy as np
from dataclasses import dataclass

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


@dataclass
class Sphere(BaseShape):
    """
    Sphere centered on the origin.

    ``hemisphere`` restricts emission to the upper (+Y) half. Spread mode
    steps around the Y axis; uniform spreads stay on the equator.
    """
    name = "sphere"
    description = "Sphere surface or volume, directed away from the center"

    radius: float = 1.0
    hemisphere: bool = False

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        azimuth = rng.uniform(0.0, 2 * np.pi)
        return self._particle(azimuth, self._random_elevation(rng), rng, thickness, direction_mode)

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        azimuth = self._wrap(self._spread_parameter(spread, rng)) * 2 * np.pi
        elevation = 0.0 if spread.uniform else self._random_elevation(rng)
        return self._particle(azimuth, elevation, rng, thickness, direction_mode)

    def _random_elevation(self, rng) -> float:
        # Uniform in sin(elevation) gives uniform area density
        low = 0.0 if self.hemisphere else -1.0
        return float(np.arcsin(rng.uniform(low, 1.0)))

    def _particle(self, azimuth, elevation, rng, thickness, direction_mode) -> EmittedParticle:
        point = Vec3.from_spherical(azimuth, elevation, self.radius)
        coef = self._thickness_coef(rng, thickness)
        return EmittedParticle(
            position=point * coef,
            direction=self._outward(point, Vec3.ZERO, direction_mode),
        )
