"""
Cannon-Wall: Unit Types
=======================
Thin immutable wrappers around floats so speeds, angles, times, lengths
and fitness values cannot be mixed up by accident.

Values of the same type are ordered; comparing two different units
raises TypeError.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class _Scalar:
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'value', float(self.value))

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class MetresPerSecond(_Scalar):
    """Launch speed [m/s]."""


class Radians(_Scalar):
    """Launch elevation [rad]."""


class Seconds(_Scalar):
    """Elapsed flight time [s]."""


class Metres(_Scalar):
    """Horizontal or vertical distance [m]."""


class Fitness(_Scalar):
    """Optimization score. Bigger is better."""
