"""
Edge Shape - particles along a line segment

A segment has no volume, so thickness is ignored. Automatic direction is
+Y for every particle.
"""

from dataclasses import dataclass, field

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


@dataclass
class Edge(BaseShape):
    name = "edge"
    description = "Line segment between two points, directed along +Y"

    start: Vec3 = field(default_factory=lambda: Vec3(-0.5, 0.0, 0.0))
    end: Vec3 = field(default_factory=lambda: Vec3(0.5, 0.0, 0.0))

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        return self._particle(float(rng.uniform(0.0, 1.0)), direction_mode)

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        t = self._clamp(self._spread_parameter(spread, rng))
        return self._particle(t, direction_mode)

    def _particle(self, t: float, direction_mode: EmitterDirectionMode) -> EmittedParticle:
        return EmittedParticle(
            position=self.start.lerp(self.end, t),
            direction=direction_mode.resolve(Vec3.Y),
        )
