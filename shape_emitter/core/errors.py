"""
Emitter Errors

Degenerate geometry (empty vertex sets, zero-length vectors) is never an
error: samplers recover with the identity particle or a +Y direction.
The exceptions here cover the cases that must stop an emission call.
"""


class EmitterError(Exception):
    """Base class for emission failures"""


class ShapeConfigurationError(EmitterError):
    """A shape is missing geometry it needs (e.g. a mesh with no positions)"""


class SpreadNotSupportedError(EmitterError, NotImplementedError):
    """Spread emission was requested from a shape that only samples randomly"""

    def __init__(self, shape_name: str):
        super().__init__(f"Spread emission is not implemented for shape '{shape_name}'")
        self.shape_name = shape_name


class PresetError(EmitterError, KeyError):
    """Unknown preset or shape name"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ''
