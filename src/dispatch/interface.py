from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol, Sequence


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    IDLE = "IDLE"

    def reversed(self) -> "Direction":
        if self is Direction.UP:
            return Direction.DOWN
        if self is Direction.DOWN:
            return Direction.UP
        return Direction.IDLE


@dataclass(frozen=True)
class FloorRequest:
    """A pending call for the car to visit a floor."""

    floor: int
    requested_at: datetime


@dataclass(frozen=True)
class DispatchDecision:
    """Recommendation returned by a policy; the controller commits it."""

    floor: Optional[int]
    direction: Direction


class DispatchPolicy(Protocol):
    """Strategy interface for choosing the car's next destination."""

    name: str

    def next_floor(
        self,
        requests: Sequence[FloorRequest],
        current_floor: int,
        direction: Direction,
    ) -> DispatchDecision:
        """
        Return the floor to serve next and the direction the car should hold.

        ``requests`` is in arrival order. Implementations must not mutate it
        and return a decision with ``floor=None`` when it is empty.
        """
        ...
