"""
Particle Direction

Direction modes and the post-sampling composer.

The composer runs two blend passes over the sampled direction, always in
this order:

1. randomize - blend toward a random direction
2. spherize  - blend toward the particle position (radially outward
   from the origin)

The second pass reads the result of the first. Every normalization falls
back to +Y when the blended vector collapses to zero.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .particle import EmittedParticle
from .vector import Vec3


class DirectionModeKind(Enum):
    AUTOMATIC = "automatic"  # Direction taken from the shape
    FIXED = "fixed"          # Every particle gets the same direction


@dataclass(frozen=True)
class EmitterDirectionMode:
    """
    Base direction of emitted particles.

    ``fixed`` is used as-is: it is not normalized here.
    """
    kind: DirectionModeKind = DirectionModeKind.AUTOMATIC
    fixed: Vec3 = field(default_factory=lambda: Vec3.Y)

    @classmethod
    def automatic(cls) -> 'EmitterDirectionMode':
        return cls()

    @classmethod
    def fixed_direction(cls, direction: Vec3) -> 'EmitterDirectionMode':
        return cls(DirectionModeKind.FIXED, direction)

    @property
    def is_automatic(self) -> bool:
        return self.kind == DirectionModeKind.AUTOMATIC

    def resolve(self, automatic: Vec3) -> Vec3:
        """Pick the shape-provided direction or the fixed override"""
        return automatic if self.is_automatic else self.fixed


@dataclass
class EmitterDirectionParams:
    """Direction of the particles after emission"""
    base_mode: EmitterDirectionMode = field(default_factory=EmitterDirectionMode)
    # Blend weights between 0 (no effect) and 1 (full replacement)
    randomize_direction: float = 0.0
    spherize_direction: float = 0.0

    def validate(self) -> None:
        for name in ('randomize_direction', 'spherize_direction'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'mode': self.base_mode.kind.value,
            'randomize': self.randomize_direction,
            'spherize': self.spherize_direction,
        }
        if not self.base_mode.is_automatic:
            data['fixed'] = list(self.base_mode.fixed.to_tuple())
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'EmitterDirectionParams':
        data = data or {}
        kind = DirectionModeKind(data.get('mode', DirectionModeKind.AUTOMATIC.value))
        if kind == DirectionModeKind.FIXED:
            base_mode = EmitterDirectionMode.fixed_direction(
                Vec3.from_iterable(data.get('fixed', (0.0, 1.0, 0.0)))
            )
        else:
            base_mode = EmitterDirectionMode.automatic()
        return cls(
            base_mode=base_mode,
            randomize_direction=float(data.get('randomize', 0.0)),
            spherize_direction=float(data.get('spherize', 0.0)),
        )


def random_direction(rng) -> Vec3:
    """Direction with each component uniform in [-1, 1], normalized (+Y fallback)"""
    return Vec3(
        float(rng.uniform(-1.0, 1.0)),
        float(rng.uniform(-1.0, 1.0)),
        float(rng.uniform(-1.0, 1.0)),
    ).normalize_or(Vec3.Y)


def compose_direction(particle: EmittedParticle, params: EmitterDirectionParams, rng) -> EmittedParticle:
    """
    Apply randomization then spherization to ``particle.direction`` in place.

    With both weights at 0 the particle is returned untouched and no
    random numbers are drawn.
    """
    randomize = params.randomize_direction
    if randomize > 0.0:
        rand_dir = random_direction(rng)
        particle.direction = (
            rand_dir * randomize + particle.direction * (1.0 - randomize)
        ).normalize_or(Vec3.Y)

    spherize = params.spherize_direction
    if spherize > 0.0:
        particle.direction = (
            particle.position * spherize + particle.direction * (1.0 - spherize)
        ).normalize_or(Vec3.Y)

    return particle
