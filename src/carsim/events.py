from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List

LogCallback = Callable[[str, datetime], None]

REQUESTED = "requested"
REACHED = "reached"


@dataclass(frozen=True)
class LogEntry:
    kind: str
    floor: int
    message: str
    timestamp: datetime

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "floor": self.floor,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


class EventLog:
    """Records request/arrival entries and fans them out to subscribers.

    Recording and publishing are separate steps so the controller can finish a
    state change before any subscriber runs.
    """

    def __init__(self) -> None:
        self.entries: List[LogEntry] = []
        self.callbacks: List[LogCallback] = []

    def subscribe(self, callback: LogCallback) -> None:
        self.callbacks.append(callback)

    def publish(self, entry: LogEntry) -> None:
        for callback in self.callbacks:
            callback(entry.message, entry.timestamp)

    def request_accepted(self, floor: int, timestamp: datetime) -> LogEntry:
        return self._record(REQUESTED, floor, f"Floor {floor} requested", timestamp)

    def floor_reached(self, floor: int, timestamp: datetime) -> LogEntry:
        return self._record(REACHED, floor, f"Floor {floor} reached", timestamp)

    def clear(self) -> None:
        self.entries.clear()

    def _record(self, kind: str, floor: int, message: str, timestamp: datetime) -> LogEntry:
        entry = LogEntry(kind=kind, floor=floor, message=message, timestamp=timestamp)
        self.entries.append(entry)
        return entry
