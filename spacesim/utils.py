"""Shared vector, time and id helpers for the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, TypeVar

MIN_DISTANCE = 0.01
MIN_DISTANCE_SQR = MIN_DISTANCE * MIN_DISTANCE
F32_EPSILON = 1.1920929e-07

WorkUnit = float
"""Amount of work needed to produce or build something."""

_V = TypeVar("_V")


@dataclass(frozen=True)
class Vec2:
    """A 2D vector or point."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def abs_diff_eq(self, other: Vec2, epsilon: float) -> bool:
        """True when both components differ by at most ``epsilon``."""
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon


def move_towards(from_pos: Vec2, to_pos: Vec2, max_distance: float) -> Tuple[Vec2, bool]:
    """Move from ``from_pos`` toward ``to_pos``; return the new position and whether it arrived."""
    delta = to_pos - from_pos
    length_sqr = delta.length_squared()
    if math.isnan(length_sqr) or length_sqr <= max_distance:
        return to_pos, True
    norm = delta / math.sqrt(length_sqr)
    return from_pos + norm * max_distance, False


def assert_v2(value: Vec2, expected: Vec2) -> None:
    """Raise AssertionError if ``value`` is farther than MIN_DISTANCE from ``expected``."""
    distance = (value - expected).length()
    if distance > MIN_DISTANCE:
        raise AssertionError(
            f"fail, receives {value!r} but expect {expected!r}, distance of {distance!r}"
        )


@dataclass(frozen=True)
class Speed:
    value: float


@dataclass
class Tick:
    value: int = 0

    def increment(self) -> None:
        self.value += 1


@dataclass(frozen=True)
class DeltaTime:
    """Elapsed seconds of one simulation step."""

    value: float = 0.0


@dataclass(frozen=True)
class TotalTime:
    """Seconds since the start of the game."""

    value: float = 0.0

    def is_after(self, time: TotalTime) -> bool:
        return self.value >= time.value

    def is_before(self, time: TotalTime) -> bool:
        return self.value <= time.value

    def add(self, delta: DeltaTime) -> TotalTime:
        return TotalTime(self.value + delta.value)

    def sub(self, other: TotalTime) -> DeltaTime:
        return DeltaTime(self.value - other.value)

    def as_millis(self) -> int:
        """Total time in whole milliseconds."""
        return int(self.value * 1000.0)


class NextId:
    """Sequential id generator."""

    def __init__(self, known_max: Optional[int] = None) -> None:
        self._next = 0 if known_max is None else known_max + 1

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value


def next_lower(pairs: Iterable[Tuple[object, _V]]) -> Optional[_V]:
    """Follow ``(score, value)`` pairs while scores strictly decrease; return the last value."""
    selected: Optional[_V] = None
    selected_score = None
    for score, value in pairs:
        if selected_score is not None and score >= selected_score:
            break
        selected_score = score
        selected = value
    return selected