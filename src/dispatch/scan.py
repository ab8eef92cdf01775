from __future__ import annotations

import logging
from typing import Sequence

from .interface import Direction, DispatchDecision, FloorRequest
from .utils import heading_for, nearest_ahead, nearest_request

logger = logging.getLogger(__name__)


class ScanPolicy:
    """Implements the SCAN (elevator) algorithm for a single car.

    The car keeps sweeping in its current direction while any request lies
    ahead of it and only reverses once nothing is left on that side.
    """

    name = "scan"

    def next_floor(
        self,
        requests: Sequence[FloorRequest],
        current_floor: int,
        direction: Direction,
    ) -> DispatchDecision:
        if not requests:
            return DispatchDecision(None, direction)

        if direction is Direction.IDLE:
            nearest = nearest_request(requests, current_floor)
            direction = heading_for(current_floor, nearest.floor)

        floor = nearest_ahead(requests, current_floor, direction)
        if floor is not None:
            return DispatchDecision(floor, direction)

        direction = direction.reversed()
        floor = nearest_ahead(requests, current_floor, direction)
        if floor is not None:
            logger.debug("SCAN reversed to %s for floor %d", direction.value, floor)
            return DispatchDecision(floor, direction)

        # Only requests on the current floor remain
        return DispatchDecision(nearest_request(requests, current_floor).floor, direction)
