"""
Shared pytest fixtures for liftdispatch tests.
"""

import logging
from datetime import datetime, timedelta

import pytest

from carsim import CarController, SimulatorConfig
from carsim.logging_config import LOGGER_NAMES

FIXED_TIME = datetime(2024, 1, 15, 9, 30, 0)


class StepClock:
    """Returns FIXED_TIME plus one second per call, so every timestamp differs."""

    def __init__(self, start: datetime = FIXED_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def messages():
    """Collects (message, timestamp) pairs delivered to the log callback."""
    return []


@pytest.fixture
def make_controller(fixed_clock, messages):
    def factory(policy: str = "fifo", total_floors: int = 10, tick_period_ms: int = 500) -> CarController:
        config = SimulatorConfig(total_floors=total_floors, tick_period_ms=tick_period_ms, policy=policy)
        return CarController(
            config,
            log_callback=lambda message, timestamp: messages.append((message, timestamp)),
            clock=fixed_clock,
        )

    return factory


@pytest.fixture(autouse=True)
def reset_library_logging():
    """Restore the silent library default around every test."""

    def _reset() -> None:
        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
                if not isinstance(handler, logging.NullHandler):
                    handler.close()
            logger.addHandler(logging.NullHandler())
            logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
