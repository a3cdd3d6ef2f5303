"""
Emitter Shape

The emission facade: owns a shape plus every emission option, and turns
one random stream into particles.

    emitter = EmitterShape(shape=Sphere(radius=2.0), thickness=0.2)
    rng = np.random.default_rng(7)
    particle = emitter.emit_particle(rng)

Each call samples the shape (randomly, or through the spread index) and
then runs the direction composer. The random generator is passed in on
every call and never stored, so a seeded generator replays the exact
same particle sequence.

Emitters are not thread-safe: spread mode mutates the emitter's index.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .direction import EmitterDirectionParams, compose_direction
from .errors import SpreadNotSupportedError
from .particle import EmittedParticle
from .spread import EmissionMode, EmissionModeKind, EmissionSpread
from ..shapes import BaseShape, ConvexMesh, create_shape


logger = logging.getLogger(__name__)


@dataclass
class EmitterShape:
    """
    Particle emission volume and emission options.

    ``thickness`` is the proportion of the volume that emits particles:
    0 emits from the outer surface, 1 from the entire volume.
    """
    shape: BaseShape = field(default_factory=ConvexMesh)
    thickness: float = 1.0
    direction_params: EmitterDirectionParams = field(default_factory=EmitterDirectionParams)
    mode: EmissionMode = field(default_factory=EmissionMode)

    def emit_particle(self, rng) -> EmittedParticle:
        """
        Emit one particle.

        Raises:
            ShapeConfigurationError: the shape's geometry is unusable
            SpreadNotSupportedError: spread mode on a random-only shape
        """
        base_mode = self.direction_params.base_mode
        if self.mode.is_spread:
            particle = self.shape.spread_particle(self.mode.spread, rng, self.thickness, base_mode)
        else:
            particle = self.shape.emit_random_particle(rng, self.thickness, base_mode)
        return compose_direction(particle, self.direction_params, rng)

    def emit(self, count: int, rng) -> List[EmittedParticle]:
        """Emit a batch of particles"""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        particles = [self.emit_particle(rng) for _ in range(count)]
        logger.debug("Emitted %d particles from %s", count, self.shape.name)
        return particles

    def set_mode(self, kind: EmissionModeKind, spread: Optional[EmissionSpread] = None) -> None:
        """
        Switch emission mode.

        Switching to spread without an explicit ``spread`` starts from a
        fresh default spread, discarding any previous running index.
        """
        if kind == EmissionModeKind.SPREAD:
            self.mode = EmissionMode.spread_mode(spread)
        else:
            self.mode = EmissionMode.random()
        logger.debug("Emission mode set to %s", kind.value)

    def validate(self) -> None:
        """
        Check the configuration before emitting.

        Raises:
            ValueError: thickness or a direction weight outside [0, 1]
            SpreadNotSupportedError: spread mode on a random-only shape
        """
        if not 0.0 <= self.thickness <= 1.0:
            raise ValueError(f"thickness must be between 0 and 1, got {self.thickness}")
        self.direction_params.validate()
        if self.mode.is_spread:
            if not 0.0 <= self.mode.spread.amount <= 1.0:
                raise ValueError(f"spread amount must be between 0 and 1, got {self.mode.spread.amount}")
            if not self.shape.supports_spread:
                raise SpreadNotSupportedError(self.shape.name)

    # ------------------------------------------------------------------------
    # Configuration round-trip (running spread state is not stored)
    # ------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'shape': self.shape.name,
            'shape_params': self.shape.params(),
            'thickness': self.thickness,
            'direction': self.direction_params.to_dict(),
            'mode': self.mode.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EmitterShape':
        return cls(
            shape=create_shape(data.get('shape', 'convex_mesh'), data.get('shape_params')),
            thickness=float(data.get('thickness', 1.0)),
            direction_params=EmitterDirectionParams.from_dict(data.get('direction')),
            mode=EmissionMode.from_dict(data.get('mode')),
        )
