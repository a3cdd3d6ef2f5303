"""
Emitted particle value type
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .vector import Vec3


@dataclass
class EmittedParticle:
    """Spawn position and initial travel direction of one particle"""
    position: Vec3 = field(default_factory=lambda: Vec3.ZERO)
    direction: Vec3 = field(default_factory=lambda: Vec3.Y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'position': list(self.position.to_tuple()),
            'direction': list(self.direction.to_tuple()),
        }
