"""
Spread Emission

Spread mode walks a progress index across the shape instead of sampling
it fully at random. Each emission advances the index by ``amount`` and
hands the (previous, current) pair to the shape, which samples the
matching slice of its surface or volume.

Loop mode reflects an overshoot with ``1 - index`` rather than wrapping
it, so the index briefly goes negative after crossing 1.0. Ping-pong
mode discards an out-of-range step and reverses direction instead.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


logger = logging.getLogger(__name__)


class SpreadLoopMode(Enum):
    """How the spread index behaves at the end of a cycle"""
    LOOP = "loop"            # Starts over after each cycle
    PING_PONG = "ping_pong"  # Alternates direction every cycle

    @classmethod
    def from_name(cls, name: str) -> 'SpreadLoopMode':
        key = name.strip().lower().replace('-', '_')
        for mode in cls:
            if mode.value == key:
                return mode
        available = ', '.join(m.value for m in cls)
        raise ValueError(f"Unknown spread loop mode '{name}'. Available: {available}")


@dataclass
class SpreadState:
    """Snapshot of the running part of an EmissionSpread"""
    current_index: float = 0.0
    upwards: bool = True


@dataclass
class EmissionSpread:
    """
    Spread parameters plus the emitter-owned running index.

    ``amount``, ``loop_mode`` and ``uniform`` are configuration.
    ``current_index`` and ``upwards`` evolve on every emission and are
    left out of ``to_dict`` so they never end up in stored presets.
    """
    # 0 samples the whole shape every time, 0.1 steps in 10% slices
    amount: float = 0.1
    loop_mode: SpreadLoopMode = SpreadLoopMode.LOOP
    # Place particles at the slice boundary instead of jittering inside it
    uniform: bool = False

    current_index: float = field(default=0.0, repr=False)
    upwards: bool = field(default=True, repr=False)

    def advance(self) -> Tuple[float, float]:
        """
        Step the index once.

        Returns:
            (previous_index, current_index) for this emission
        """
        if self.upwards:
            self.current_index += self.amount
            previous_index = self.current_index - self.amount
        else:
            self.current_index -= self.amount
            previous_index = self.current_index + self.amount

        if self.loop_mode == SpreadLoopMode.LOOP:
            if self.current_index > 1.0:
                self.current_index = 1.0 - self.current_index
        elif self.loop_mode == SpreadLoopMode.PING_PONG:
            if self.current_index < 0.0 or self.current_index > 1.0:
                self.upwards = not self.upwards
                self.current_index = previous_index
                logger.debug(
                    "Spread ping-pong reversed at %.3f (upwards=%s)",
                    self.current_index, self.upwards,
                )

        return previous_index, self.current_index

    # Running state ----------------------------------------------------------

    def snapshot(self) -> SpreadState:
        return SpreadState(current_index=self.current_index, upwards=self.upwards)

    def restore(self, state: SpreadState) -> None:
        self.current_index = state.current_index
        self.upwards = state.upwards

    def reset(self) -> None:
        self.restore(SpreadState())

    # Configuration ----------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'amount': self.amount,
            'loop_mode': self.loop_mode.value,
            'uniform': self.uniform,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'EmissionSpread':
        data = data or {}
        loop_mode = data.get('loop_mode', SpreadLoopMode.LOOP)
        if isinstance(loop_mode, str):
            loop_mode = SpreadLoopMode.from_name(loop_mode)
        return cls(
            amount=float(data.get('amount', 0.1)),
            loop_mode=loop_mode,
            uniform=bool(data.get('uniform', False)),
        )


class EmissionModeKind(Enum):
    """Emission modes"""
    RANDOM = "random"  # Particles placed randomly in the volume
    SPREAD = "spread"  # Particles placed at discrete intervals


@dataclass
class EmissionMode:
    """
    Active emission mode. ``spread`` is only set for spread mode.

    Example:
        EmissionMode.random()
        EmissionMode.spread_mode(EmissionSpread(amount=0.25))
    """
    kind: EmissionModeKind = EmissionModeKind.RANDOM
    spread: Optional[EmissionSpread] = None

    def __post_init__(self):
        if self.kind == EmissionModeKind.SPREAD and self.spread is None:
            self.spread = EmissionSpread()
        elif self.kind == EmissionModeKind.RANDOM:
            self.spread = None

    @classmethod
    def random(cls) -> 'EmissionMode':
        return cls(EmissionModeKind.RANDOM)

    @classmethod
    def spread_mode(cls, spread: Optional[EmissionSpread] = None) -> 'EmissionMode':
        return cls(EmissionModeKind.SPREAD, spread)

    @property
    def is_spread(self) -> bool:
        return self.kind == EmissionModeKind.SPREAD

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'kind': self.kind.value}
        if self.spread is not None:
            data['spread'] = self.spread.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'EmissionMode':
        data = data or {}
        kind = EmissionModeKind(data.get('kind', EmissionModeKind.RANDOM.value))
        if kind == EmissionModeKind.SPREAD:
            return cls.spread_mode(EmissionSpread.from_dict(data.get('spread')))
        return cls.random()
