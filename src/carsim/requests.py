from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Iterator, Tuple

from dispatch import FloorRequest

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class RequestSet:
    """Outstanding floor calls, unique by floor and kept in arrival order."""

    def __init__(self, total_floors: int, clock: Clock = datetime.now) -> None:
        self.total_floors = total_floors
        self._clock = clock
        self._requests: Dict[int, FloorRequest] = {}

    def submit(self, floor: int) -> bool:
        if isinstance(floor, bool) or not isinstance(floor, int):
            logger.debug("Rejected floor %r: not an integer", floor)
            return False
        if not 1 <= floor <= self.total_floors:
            logger.debug("Rejected floor %d: outside 1..%d", floor, self.total_floors)
            return False
        if floor in self._requests:
            logger.debug("Rejected floor %d: already pending", floor)
            return False
        self._requests[floor] = FloorRequest(floor=floor, requested_at=self._clock())
        return True

    def get(self, floor: int) -> FloorRequest | None:
        return self._requests.get(floor)

    def remove(self, floor: int) -> None:
        self._requests.pop(floor, None)

    def contains(self, floor: int) -> bool:
        return floor in self._requests

    def is_empty(self) -> bool:
        return not self._requests

    def all(self) -> Tuple[FloorRequest, ...]:
        return tuple(self._requests.values())

    def prune_above(self, max_floor: int) -> None:
        dropped = [floor for floor in self._requests if floor > max_floor]
        for floor in dropped:
            del self._requests[floor]
        if dropped:
            logger.info("Dropped requests above floor %d: %s", max_floor, dropped)

    def clear(self) -> None:
        self._requests.clear()

    def __contains__(self, floor: object) -> bool:
        return floor in self._requests

    def __iter__(self) -> Iterator[FloorRequest]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._requests)
