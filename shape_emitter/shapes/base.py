"""
Base Shape - Abstract base class for emission shapes

Every shape answers two questions:
- where does a randomly placed particle spawn, and which way does it go
- where does the next particle spawn when emission is spread across
  the shape in discrete steps

Shapes that only support random placement set ``supports_spread = False``
and raise ``SpreadNotSupportedError`` from ``spread_particle``. They never
fall back to random placement.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Dict

from ..core.direction import EmitterDirectionMode
from ..core.errors import SpreadNotSupportedError
from ..core.particle import EmittedParticle
from ..core.spread import EmissionSpread
from ..core.vector import Vec3


logger = logging.getLogger(__name__)


@dataclass
class BaseShape(ABC):
    """Abstract base class for emission shapes"""

    # Shape metadata
    name = "base"
    description = "Base shape"
    supports_spread = True

    @abstractmethod
    def emit_random_particle(
        self,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        """Sample a particle anywhere in the shape."""

    def spread_particle(
        self,
        spread: EmissionSpread,
        rng,
        thickness: float,
        direction_mode: EmitterDirectionMode,
    ) -> EmittedParticle:
        """Sample a particle in the slice selected by the spread index."""
        raise SpreadNotSupportedError(self.name)

    # ------------------------------------------------------------------------
    # Sampling helpers
    # ------------------------------------------------------------------------

    @staticmethod
    def _thickness_coef(rng, thickness: float) -> float:
        """Inward scale factor in [1 - thickness, 1]; 0 keeps points on the surface"""
        return float(rng.uniform(1.0 - thickness, 1.0))

    @staticmethod
    def _spread_parameter(spread: EmissionSpread, rng) -> float:
        """
        Advance the spread index and pick a position inside the new slice.

        Uniform spreads use the index reached by this step. Otherwise the
        value is jittered along the step taken from the previous index,
        which may run past 1 when loop mode reflects the index; periodic
        shapes wrap it and bounded shapes clamp it.
        """
        previous, current = spread.advance()
        if spread.uniform:
            return current
        if abs(current - previous) > spread.amount + 1e-9:
            # Loop reflection jumped the index, jitter over the unreflected step
            current = previous + spread.amount if spread.upwards else previous - spread.amount
        low, high = min(previous, current), max(previous, current)
        return float(rng.uniform(low, high))

    @staticmethod
    def _wrap(t: float) -> float:
        """Periodic parameters (angles) wrap around"""
        return t % 1.0

    @staticmethod
    def _clamp(t: float) -> float:
        """Bounded parameters (segments, buffers) stay on the shape"""
        return min(max(t, 0.0), 1.0)

    @staticmethod
    def _outward(point: Vec3, center: Vec3, direction_mode: EmitterDirectionMode) -> Vec3:
        """Direction from ``center`` through ``point`` unless a fixed direction is set"""
        if not direction_mode.is_automatic:
            return direction_mode.fixed
        direction = (point - center).try_normalize()
        if direction is None:
            logger.debug("Sampled point %s sits on the center, using +Y", point)
            return Vec3.Y
        return direction

    # ------------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------------

    def params(self) -> Dict[str, Any]:
        """Shape parameters as plain data (vectors become lists)"""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value.to_tuple()) if isinstance(value, Vec3) else value
        return data

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> 'BaseShape':
        """Build the shape from plain data, ignoring unknown keys"""
        kwargs = {}
        for f in fields(cls):
            if f.name not in params:
                continue
            value = params[f.name]
            if f.type in (Vec3, 'Vec3') and not isinstance(value, Vec3):
                value = Vec3.from_iterable(value)
            kwargs[f.name] = value
        return cls(**kwargs)
