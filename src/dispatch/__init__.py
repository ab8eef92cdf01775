from __future__ import annotations

import logging
from typing import Dict, Type

from .direction_based import DirectionBasedPolicy
from .fifo import FirstInFirstOutPolicy
from .interface import Direction, DispatchDecision, DispatchPolicy, FloorRequest
from .scan import ScanPolicy

__all__ = [
    "Direction",
    "DirectionBasedPolicy",
    "DispatchDecision",
    "DispatchPolicy",
    "FirstInFirstOutPolicy",
    "FloorRequest",
    "ScanPolicy",
    "POLICY_REGISTRY",
    "get_policy",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())


POLICY_REGISTRY: Dict[str, Type[DispatchPolicy]] = {
    "fifo": FirstInFirstOutPolicy,
    "scan": ScanPolicy,
    "direction-based": DirectionBasedPolicy,
    "direction_based": DirectionBasedPolicy,
}


def get_policy(name: str) -> DispatchPolicy:
    cls = POLICY_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown dispatch policy '{name}'. Available: {', '.join(POLICY_REGISTRY)}")
    return cls()
