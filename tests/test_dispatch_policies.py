"""Unit tests for the FIFO, SCAN and direction-based dispatch policies."""

from datetime import datetime, timedelta

import pytest

from dispatch import (
    Direction,
    DirectionBasedPolicy,
    DispatchDecision,
    FirstInFirstOutPolicy,
    FloorRequest,
    ScanPolicy,
    get_policy,
)
from dispatch.utils import direction_towards, nearest_request

BASE = datetime(2024, 1, 15, 9, 0, 0)


def pending(*floors):
    return [FloorRequest(floor=floor, requested_at=BASE + timedelta(seconds=i)) for i, floor in enumerate(floors)]


class TestRegistry:
    @pytest.mark.parametrize(
        "name, cls",
        [
            ("fifo", FirstInFirstOutPolicy),
            ("SCAN", ScanPolicy),
            ("direction-based", DirectionBasedPolicy),
            ("direction_based", DirectionBasedPolicy),
        ],
    )
    def test_lookup_is_case_insensitive(self, name, cls):
        assert isinstance(get_policy(name), cls)

    def test_unknown_policy_lists_available(self):
        with pytest.raises(ValueError, match="Available: fifo, scan"):
            get_policy("look")


@pytest.mark.parametrize("policy", [FirstInFirstOutPolicy(), ScanPolicy(), DirectionBasedPolicy()])
def test_empty_requests_yield_no_floor(policy):
    decision = policy.next_floor([], 4, Direction.UP)

    assert decision == DispatchDecision(None, Direction.UP)


class TestHelpers:
    def test_nearest_prefers_earliest_on_tie(self):
        assert nearest_request(pending(7, 3), 5).floor == 7
        assert nearest_request(pending(3, 7), 5).floor == 3

    def test_direction_towards(self):
        assert direction_towards(3, 8) is Direction.UP
        assert direction_towards(8, 3) is Direction.DOWN
        assert direction_towards(4, 4) is Direction.IDLE

    def test_reversed(self):
        assert Direction.UP.reversed() is Direction.DOWN
        assert Direction.DOWN.reversed() is Direction.UP
        assert Direction.IDLE.reversed() is Direction.IDLE


class TestFifo:
    def test_serves_oldest_regardless_of_distance(self):
        policy = FirstInFirstOutPolicy()
        requests = pending(5, 2, 8)
        served = []
        current = 1
        while requests:
            decision = policy.next_floor(requests, current, Direction.IDLE)
            served.append(decision.floor)
            current = decision.floor
            requests = [req for req in requests if req.floor != decision.floor]

        assert served == [5, 2, 8]

    def test_direction_points_at_oldest(self):
        policy = FirstInFirstOutPolicy()

        assert policy.next_floor(pending(2, 9), 6, Direction.UP) == DispatchDecision(2, Direction.DOWN)
        assert policy.next_floor(pending(6), 6, Direction.UP) == DispatchDecision(6, Direction.IDLE)


class TestScan:
    def test_idle_car_picks_nearest_and_sets_direction(self):
        decision = ScanPolicy().next_floor(pending(3, 7), 1, Direction.IDLE)

        assert decision == DispatchDecision(3, Direction.UP)

    def test_continues_sweep_after_serving(self):
        decision = ScanPolicy().next_floor(pending(7), 3, Direction.UP)

        assert decision == DispatchDecision(7, Direction.UP)

    def test_reverses_when_nothing_ahead(self):
        decision = ScanPolicy().next_floor(pending(2), 5, Direction.UP)

        assert decision == DispatchDecision(2, Direction.DOWN)

    def test_nearest_ahead_beats_older_request(self):
        decision = ScanPolicy().next_floor(pending(9, 2, 6), 4, Direction.UP)

        assert decision == DispatchDecision(6, Direction.UP)

    def test_going_down_picks_highest_floor_below(self):
        decision = ScanPolicy().next_floor(pending(1, 3, 8), 5, Direction.DOWN)

        assert decision == DispatchDecision(3, Direction.DOWN)

    def test_idle_tie_goes_to_first_submitted(self):
        assert ScanPolicy().next_floor(pending(7, 3), 5, Direction.IDLE) == DispatchDecision(7, Direction.UP)
        assert ScanPolicy().next_floor(pending(3, 7), 5, Direction.IDLE) == DispatchDecision(3, Direction.DOWN)

    def test_idle_with_request_on_current_floor_sweeps_to_others_first(self):
        # Nearest is the current floor, which sets DOWN; nothing below, so it reverses.
        decision = ScanPolicy().next_floor(pending(4, 6), 4, Direction.IDLE)

        assert decision == DispatchDecision(6, Direction.UP)

    def test_only_current_floor_left_falls_back_to_it(self):
        decision = ScanPolicy().next_floor(pending(4), 4, Direction.UP)

        assert decision == DispatchDecision(4, Direction.DOWN)

    def test_does_not_mutate_requests(self):
        requests = pending(5, 1, 9)
        ScanPolicy().next_floor(requests, 3, Direction.IDLE)

        assert [req.floor for req in requests] == [5, 1, 9]


class TestDirectionBased:
    def test_idle_car_goes_straight_to_nearest(self):
        decision = DirectionBasedPolicy().next_floor(pending(4, 6), 4, Direction.IDLE)

        assert decision == DispatchDecision(4, Direction.DOWN)

    def test_idle_car_heads_up_to_nearest_above(self):
        decision = DirectionBasedPolicy().next_floor(pending(8, 3), 1, Direction.IDLE)

        assert decision == DispatchDecision(3, Direction.UP)

    def test_keeps_direction_while_requests_ahead(self):
        policy = DirectionBasedPolicy()

        assert policy.next_floor(pending(2, 8), 5, Direction.UP) == DispatchDecision(8, Direction.UP)
        assert policy.next_floor(pending(2, 8), 5, Direction.DOWN) == DispatchDecision(2, Direction.DOWN)

    def test_reverses_when_nothing_ahead(self):
        decision = DirectionBasedPolicy().next_floor(pending(2), 8, Direction.UP)

        assert decision == DispatchDecision(2, Direction.DOWN)

    def test_fallback_recomputes_direction(self):
        # DOWN reverses to UP, finds nothing, then the fallback resets it to DOWN.
        decision = DirectionBasedPolicy().next_floor(pending(4), 4, Direction.DOWN)

        assert decision == DispatchDecision(4, Direction.DOWN)

    def test_fallback_from_up(self):
        decision = DirectionBasedPolicy().next_floor(pending(4), 4, Direction.UP)

        assert decision == DispatchDecision(4, Direction.DOWN)
