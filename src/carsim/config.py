from __future__ import annotations

from dataclasses import dataclass

MIN_FLOORS = 3
MAX_FLOORS = 20
MIN_TICK_PERIOD_MS = 100
MAX_TICK_PERIOD_MS = 2000

DEFAULT_TOTAL_FLOORS = 10
DEFAULT_TICK_PERIOD_MS = 500
DEFAULT_POLICY = "fifo"


def validate_total_floors(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_FLOORS <= value <= MAX_FLOORS


def validate_tick_period(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_TICK_PERIOD_MS <= value <= MAX_TICK_PERIOD_MS
    )


@dataclass
class SimulatorConfig:
    """Building size, tick pacing and dispatch policy for one car."""

    total_floors: int = DEFAULT_TOTAL_FLOORS
    tick_period_ms: int = DEFAULT_TICK_PERIOD_MS
    policy: str = DEFAULT_POLICY

    def __post_init__(self) -> None:
        if not validate_total_floors(self.total_floors):
            raise ValueError(
                f"total_floors must be an integer in [{MIN_FLOORS}, {MAX_FLOORS}], got {self.total_floors!r}"
            )
        if not validate_tick_period(self.tick_period_ms):
            raise ValueError(
                f"tick_period_ms must be an integer in [{MIN_TICK_PERIOD_MS}, {MAX_TICK_PERIOD_MS}], "
                f"got {self.tick_period_ms!r}"
            )

    @property
    def tick_period_seconds(self) -> float:
        return self.tick_period_ms / 1000
