"""Single-car elevator simulation core."""

import logging

from .config import SimulatorConfig
from .controller import CarController, CarSnapshot, CarState, CarStatus
from .events import EventLog, LogEntry
from .requests import RequestSet

__all__ = [
    "CarController",
    "CarSnapshot",
    "CarState",
    "CarStatus",
    "EventLog",
    "LogEntry",
    "RequestSet",
    "SimulatorConfig",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
