from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from dispatch import Direction, DispatchPolicy, FloorRequest, get_policy
from dispatch.utils import direction_towards

from .config import (
    DEFAULT_TICK_PERIOD_MS,
    DEFAULT_TOTAL_FLOORS,
    SimulatorConfig,
    validate_tick_period,
    validate_total_floors,
)
from .events import EventLog, LogCallback, LogEntry
from .requests import Clock, RequestSet

logger = logging.getLogger(__name__)


class CarStatus(str, Enum):
    STOPPED = "STOPPED"
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


@dataclass(frozen=True)
class CarSnapshot:
    """Read-only view of the car handed to rendering and logging code."""

    current_floor: int
    direction: Direction
    target_floor: Optional[int]
    running: bool
    paused: bool
    pending_requests: Tuple[FloorRequest, ...]
    total_floors: int
    tick_period_ms: int
    policy: str
    status: CarStatus

    def as_dict(self) -> dict:
        return {
            "current_floor": self.current_floor,
            "direction": self.direction.value,
            "target_floor": self.target_floor,
            "running": self.running,
            "paused": self.paused,
            "pending_requests": [
                {"floor": req.floor, "requested_at": req.requested_at.isoformat()}
                for req in self.pending_requests
            ],
            "total_floors": self.total_floors,
            "tick_period_ms": self.tick_period_ms,
            "policy": self.policy,
            "status": self.status.value,
        }


@dataclass
class CarState:
    current_floor: int = 1
    direction: Direction = Direction.IDLE
    target_floor: Optional[int] = None
    running: bool = False
    paused: bool = False
    stopped: bool = True


class CarController:
    """Single-car state machine advanced one floor per tick.

    The controller owns every state change: dispatch policies only recommend a
    floor, and the controller commits it. All public operations take the same
    lock so a driver thread calling :meth:`tick` can run alongside request
    submission and reconfiguration.
    """

    def __init__(
        self,
        config: Optional[SimulatorConfig] = None,
        log_callback: Optional[LogCallback] = None,
        clock: Clock = datetime.now,
    ) -> None:
        self.config = config or SimulatorConfig()
        self.policy: DispatchPolicy = get_policy(self.config.policy)
        self.state = CarState()
        self.requests = RequestSet(self.config.total_floors, clock=clock)
        self.events = EventLog()
        self._clock = clock
        self._lock = threading.RLock()
        if log_callback is not None:
            self.events.subscribe(log_callback)

    # Lifecycle

    def start(self) -> None:
        with self._lock:
            if self.state.running and not self.state.paused:
                return
            self.state.running = True
            self.state.paused = False
            self.state.stopped = False
            logger.info("Car started at floor %d", self.state.current_floor)

    def pause(self) -> None:
        with self._lock:
            self.state.paused = True
            logger.info("Car paused at floor %d", self.state.current_floor)

    def reset(self) -> None:
        with self._lock:
            self.state = CarState()
            self.requests.clear()
            self.events.clear()
            logger.info("Car reset")

    def restore_defaults(self) -> None:
        with self._lock:
            self.config.total_floors = DEFAULT_TOTAL_FLOORS
            self.config.tick_period_ms = DEFAULT_TICK_PERIOD_MS
            self.requests.total_floors = DEFAULT_TOTAL_FLOORS
            self.reset()

    # Requests and simulation

    def submit_request(self, floor: int) -> bool:
        with self._lock:
            if not self.requests.submit(floor):
                return False
            request = self.requests.get(floor)
            entry = self.events.request_accepted(floor, request.requested_at)
            logger.info("Floor %d requested (%d pending)", floor, len(self.requests))
            if not self.state.running and not self.state.paused:
                self.start()
            self.events.publish(entry)
            return True

    def tick(self) -> None:
        with self._lock:
            arrival = self._step()
            # Subscribers only see the car once the step is fully committed
            if arrival is not None:
                self.events.publish(arrival)

    def _step(self) -> Optional[LogEntry]:
        state = self.state
        arrival = None
        if state.paused or not state.running:
            return None

        if state.target_floor is None or state.current_floor == state.target_floor:
            if state.target_floor is not None:
                arrival = self._arrive(state.target_floor)

            decision = self.policy.next_floor(
                self.requests.all(), state.current_floor, state.direction
            )
            if decision.floor is None:
                state.direction = Direction.IDLE
                state.running = False
                logger.info("No pending requests; car idle at floor %d", state.current_floor)
                return arrival

            state.target_floor = decision.floor
            state.direction = direction_towards(state.current_floor, state.target_floor)
            logger.debug(
                "%s dispatched car from %d to %d",
                self.policy.name,
                state.current_floor,
                state.target_floor,
            )

        if state.current_floor < state.target_floor:
            state.current_floor += 1
        elif state.current_floor > state.target_floor:
            state.current_floor -= 1
        return arrival

    def _arrive(self, floor: int) -> LogEntry:
        self.requests.remove(floor)
        self.state.target_floor = None
        logger.info("Floor %d reached", floor)
        return self.events.floor_reached(floor, self._clock())

    # Configuration

    def configure(
        self, total_floors: Optional[int] = None, tick_period_ms: Optional[int] = None
    ) -> List[str]:
        """Apply each valid setting and return the names of rejected ones.

        Lowering the floor count clamps the car and drops requests that no
        longer exist in one step, so an in-flight tick never sees half of it.
        """

        rejected: List[str] = []
        with self._lock:
            if total_floors is not None:
                if validate_total_floors(total_floors):
                    self._resize(total_floors)
                else:
                    rejected.append("total_floors")
            if tick_period_ms is not None:
                if validate_tick_period(tick_period_ms):
                    self.config.tick_period_ms = tick_period_ms
                    logger.info("Tick period set to %d ms", tick_period_ms)
                else:
                    rejected.append("tick_period_ms")
        if rejected:
            logger.debug("Ignored out-of-range settings: %s", ", ".join(rejected))
        return rejected

    def set_policy(self, name: str) -> None:
        policy = get_policy(name)
        with self._lock:
            self.policy = policy
            self.config.policy = policy.name
            logger.info("Dispatch policy set to %s", policy.name)

    def _resize(self, total_floors: int) -> None:
        self.config.total_floors = total_floors
        self.requests.total_floors = total_floors
        if self.state.current_floor > total_floors:
            self.state.current_floor = total_floors
        self.requests.prune_above(total_floors)
        target = self.state.target_floor
        if target is not None and target not in self.requests:
            self.state.target_floor = None
        logger.info("Building resized to %d floors", total_floors)

    # Views

    @property
    def status(self) -> CarStatus:
        if self.state.paused:
            return CarStatus.PAUSED
        if self.state.running:
            return CarStatus.RUNNING
        if self.state.stopped:
            return CarStatus.STOPPED
        return CarStatus.IDLE

    @property
    def log(self) -> List[LogEntry]:
        with self._lock:
            return list(self.events.entries)

    def subscribe(self, callback: LogCallback) -> None:
        with self._lock:
            self.events.subscribe(callback)

    def snapshot(self) -> CarSnapshot:
        with self._lock:
            return CarSnapshot(
                current_floor=self.state.current_floor,
                direction=self.state.direction,
                target_floor=self.state.target_floor,
                running=self.state.running,
                paused=self.state.paused,
                pending_requests=self.requests.all(),
                total_floors=self.config.total_floors,
                tick_period_ms=self.config.tick_period_ms,
                policy=self.policy.name,
                status=self.status,
            )
