"""CLI for replaying single-car dispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from carsim import CarController, SimulatorConfig
from carsim.logging_config import configure_from_env

SCENARIO_EPOCH = datetime(2000, 1, 1)


class TickClock:
    """Deterministic clock advancing by one tick period per simulated step."""

    def __init__(self, controller_config: SimulatorConfig, epoch: datetime = SCENARIO_EPOCH) -> None:
        self.config = controller_config
        self.now = epoch

    def advance(self) -> None:
        self.now += timedelta(milliseconds=self.config.tick_period_ms)

    def __call__(self) -> datetime:
        return self.now


def build_controller(
    config: Dict, log_callback: Optional[Callable[[str, datetime], None]] = None
) -> Tuple[CarController, TickClock]:
    sim_config = SimulatorConfig(
        total_floors=config.get("total_floors", 10),
        tick_period_ms=config.get("tick_period_ms", 500),
        policy=config.get("policy", "fifo"),
    )
    clock = TickClock(sim_config)
    controller = CarController(sim_config, log_callback=log_callback, clock=clock)
    return controller, clock


def _apply_scheduled_events(controller: CarController, events: Iterable[Dict], current_tick: int) -> None:
    for event in events:
        if event.get("tick") != current_tick:
            continue
        kind = event.get("type")
        if kind == "start":
            controller.start()
        elif kind == "pause":
            controller.pause()
        elif kind == "reset":
            controller.reset()
        elif kind == "configure":
            controller.configure(event.get("total_floors"), event.get("tick_period_ms"))
        elif kind == "policy":
            controller.set_policy(event["name"])


def _submit_scheduled_requests(controller: CarController, requests: Iterable[Dict], current_tick: int) -> int:
    accepted = 0
    for request in requests:
        if request.get("tick", 0) == current_tick and controller.submit_request(request["floor"]):
            accepted += 1
    return accepted


def run_scenario(controller: CarController, clock: TickClock, config: Dict) -> List[Dict]:
    """Replay the scenario and return the car's floor after every tick."""

    duration = config.get("duration", 100)
    events = config.get("events", [])
    requests = config.get("requests", [])
    trace: List[Dict] = []

    for current_tick in range(duration):
        _apply_scheduled_events(controller, events, current_tick)
        _submit_scheduled_requests(controller, requests, current_tick)
        controller.tick()
        snapshot = controller.snapshot()
        trace.append(
            {
                "tick": current_tick,
                "floor": snapshot.current_floor,
                "direction": snapshot.direction.value,
                "target": snapshot.target_floor,
            }
        )
        clock.advance()
    return trace


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the final state, log and trace as JSON",
    )
    parser.add_argument("--policy", help="Override the scenario's dispatch policy")
    args = parser.parse_args()

    configure_from_env()
    config = json.loads(args.config.read_text())
    if args.policy:
        config["policy"] = args.policy
    try:
        controller, clock = build_controller(config)
    except ValueError as exc:
        parser.error(str(exc))
    trace = run_scenario(controller, clock, config)

    final_state = controller.snapshot().as_dict()
    log = [entry.as_dict() for entry in controller.log]
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 100),
        "policy": final_state["policy"],
        "final_state": final_state,
        "log": log,
        "trace": trace,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Policy: {results['policy']}")
    print(f"Duration: {results['duration']} ticks")
    print(f"Final floor: {final_state['current_floor']} ({final_state['status']})")
    print(f"Pending requests: {[req['floor'] for req in final_state['pending_requests']]}")
    print("Log:")
    for entry in log:
        print(f"  {entry['timestamp']}  {entry['message']}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
