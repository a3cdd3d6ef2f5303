"""
Convex Mesh Shape

Spawns particles on the vertices of a convex mesh and directs them away
from the mesh's nominal center. Vertices are picked uniformly, which
favours densely tessellated regions over large flat faces.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from .base import BaseShape
from ..core.direction import EmitterDirectionMode
from ..core.mesh import Mesh
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


logger = logging.getLogger(__name__)


@dataclass
class ConvexMesh(BaseShape):
    """
    Particles on the vertices of a convex mesh, directed outward from
    ``nominal_center``.

    Spread mode walks the vertex buffer in order: the spread index maps
    to vertex ``round(t * (n - 1))``.
    """
    name = "convex_mesh"
    description = "Vertices of a convex mesh, directed away from its nominal center"

    mesh: Mesh = field(default_factory=Mesh.cube)
    nominal_center: Vec3 = field(default_factory=lambda: Vec3.ZERO)

    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        if self.mesh.count_vertices() == 0:
            return EmittedParticle()
        positions = self.mesh.positions()
        index = int(rng.integers(0, len(positions)))
        return self._particle_at(positions[index], rng, thickness, direction_mode)

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        if self.mesh.count_vertices() == 0:
            return EmittedParticle()
        positions = self.mesh.positions()
        t = self._clamp(self._spread_parameter(spread, rng))
        index = int(round(t * (len(positions) - 1)))
        return self._particle_at(positions[index], rng, thickness, direction_mode)

    def _particle_at(self, vertex, rng, thickness: float, direction_mode: EmitterDirectionMode) -> EmittedParticle:
        point = Vec3.from_iterable(vertex)
        coef = self._thickness_coef(rng, thickness)
        return EmittedParticle(
            position=point * coef,
            direction=self._outward(point, self.nominal_center, direction_mode),
        )

    def params(self) -> Dict[str, Any]:
        positions = self.mesh.attribute(Mesh.ATTRIBUTE_POSITION)
        return {
            'vertices': [] if positions is None else positions.tolist(),
            'nominal_center': list(self.nominal_center.to_tuple()),
        }

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'ConvexMesh':
        """
        Accepts either ``vertices`` (list of xyz) or ``size`` for a cube.

        Without both, the default unit cube is used.
        """
        if 'vertices' in params:
            mesh = Mesh.from_positions(params['vertices'])
        else:
            mesh = Mesh.cube(float(params.get('size', 1.0)))
        center = Vec3.from_iterable(params.get('nominal_center', (0.0, 0.0, 0.0)))
        return cls(mesh=mesh, nominal_center=center)
