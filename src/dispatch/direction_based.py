from __future__ import annotations

import logging
from typing import Sequence

from .interface import Direction, DispatchDecision, FloorRequest
from .utils import heading_for, nearest_ahead, nearest_request

logger = logging.getLogger(__name__)


class DirectionBasedPolicy:
    """Keeps heading the same way while requests remain ahead.

    Differs from SCAN in two places: an idle car goes straight to the nearest
    request, and when neither direction has anything ahead the car serves the
    nearest request with its direction recomputed from scratch. In that last
    case the direction can flip twice inside one call; only the final value is
    returned.
    """

    name = "direction-based"

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
            return DispatchDecision(nearest.floor, heading_for(current_floor, nearest.floor))

        floor = nearest_ahead(requests, current_floor, direction)
        if floor is not None:
            return DispatchDecision(floor, direction)

        direction = direction.reversed()
        floor = nearest_ahead(requests, current_floor, direction)
        if floor is not None:
            logger.debug("Direction-based reversed to %s for floor %d", direction.value, floor)
            return DispatchDecision(floor, direction)

        nearest = nearest_request(requests, current_floor)
        return DispatchDecision(nearest.floor, heading_for(current_floor, nearest.floor))
