"""Tests for the JSON views of snapshots and log entries."""

from conftest import FIXED_TIME


def test_snapshot_as_dict(make_controller):
    controller = make_controller(policy="direction_based")
    controller.submit_request(4)
    controller.tick()

    payload = controller.snapshot().as_dict()

    assert payload == {
        "current_floor": 2,
        "direction": "UP",
        "target_floor": 4,
        "running": True,
        "paused": False,
        "pending_requests": [{"floor": 4, "requested_at": FIXED_TIME.isoformat()}],
        "total_floors": 10,
        "tick_period_ms": 500,
        "policy": "direction-based",
        "status": "RUNNING",
    }


def test_log_entry_as_dict(make_controller):
    controller = make_controller()
    controller.submit_request(2)

    assert [entry.as_dict() for entry in controller.log] == [
        {"kind": "requested", "floor": 2, "message": "Floor 2 requested", "timestamp": FIXED_TIME.isoformat()}
    ]


def test_snapshot_is_detached_from_later_changes(make_controller):
    controller = make_controller()
    controller.submit_request(3)
    snapshot = controller.snapshot()

    controller.submit_request(5)

    assert [req.floor for req in snapshot.pending_requests] == [3]
