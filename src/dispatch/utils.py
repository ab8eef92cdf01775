from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .interface import Direction, FloorRequest


def direction_towards(current_floor: int, floor: int) -> Direction:
    if floor > current_floor:
        return Direction.UP
    if floor < current_floor:
        return Direction.DOWN
    return Direction.IDLE


def nearest_request(requests: Sequence[FloorRequest], current_floor: int) -> FloorRequest:
    """Return the request closest to ``current_floor``.

    Ties go to the earliest request in arrival order; ``min`` keeps the first
    minimum it encounters, which keeps replays reproducible.
    """

    return min(requests, key=lambda req: abs(req.floor - current_floor))


def floors_ahead(
    requests: Iterable[FloorRequest], current_floor: int, direction: Direction
) -> Sequence[int]:
    """Floors strictly ahead of the car, nearest first, mirroring a SCAN sweep."""

    if direction is Direction.UP:
        return sorted(req.floor for req in requests if req.floor > current_floor)
    if direction is Direction.DOWN:
        return sorted((req.floor for req in requests if req.floor < current_floor), reverse=True)
    return []


def nearest_ahead(
    requests: Iterable[FloorRequest], current_floor: int, direction: Direction
) -> Optional[int]:
    ahead = floors_ahead(requests, current_floor, direction)
    return ahead[0] if ahead else None


def heading_for(current_floor: int, floor: int) -> Direction:
    # Never IDLE: a request on the current floor counts as heading down.
    return Direction.UP if floor > current_floor else Direction.DOWN
