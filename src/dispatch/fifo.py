from __future__ import annotations

import logging
from typing import Sequence

from .interface import Direction, DispatchDecision, FloorRequest
from .utils import direction_towards

logger = logging.getLogger(__name__)


class FirstInFirstOutPolicy:
    """Serves requests strictly in the order they were submitted."""

    name = "fifo"

    def next_floor(
        self,
        requests: Sequence[FloorRequest],
        current_floor: int,
        direction: Direction,
    ) -> DispatchDecision:
        if not requests:
            return DispatchDecision(None, direction)
        oldest = requests[0]
        logger.debug("FIFO picked floor %d (oldest of %d)", oldest.floor, len(requests))
        return DispatchDecision(oldest.floor, direction_towards(current_floor, oldest.floor))
