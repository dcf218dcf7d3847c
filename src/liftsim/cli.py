"""Run elevator scenarios defined in JSON configs against a passenger CSV."""
from __future__ import annotations

import argparse
import json
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence

from .building import Building, SimulationResult
from .config import BuildingConfig, ScenarioConfig, load_scenario
from .errors import InvalidConfiguration
from .intake import ArrivalRecord, read_arrivals

logger = logging.getLogger(__name__)


def build_building(
    config: BuildingConfig, arrivals: Sequence[ArrivalRecord], snapshot_interval: int = 0
) -> Building:
    building = Building(config, arrivals)
    if snapshot_interval:
        snapshots: List[dict] = []

        def record(snapshot: dict) -> None:
            if snapshot["time"] % snapshot_interval == 0:
                snapshots.append(snapshot)

        building.on_event("tick", record)
        building.on_event("finish", lambda result: result.snapshots.extend(snapshots))
    return building


def run_scenario(
    scenario: ScenarioConfig,
    arrivals: Sequence[ArrivalRecord],
    speeds: Optional[Sequence[int]] = None,
) -> List[SimulationResult]:
    speeds = list(speeds or scenario.compare_speeds) or [scenario.building.constraints.speed]
    results: List[SimulationResult] = []
    for speed in speeds:
        config = scenario.building.with_speed(speed)
        building = build_building(config, arrivals, scenario.snapshot_interval)
        results.append(building.run())
    return results


def percent_reduction(baseline: float, value: float) -> float:
    if math.isnan(baseline) or math.isnan(value) or baseline == 0:
        return math.nan
    return (1 - value / baseline) * 100


def save_results(output_path: Optional[Path], data: dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def print_results(results: Sequence[SimulationResult]) -> None:
    for index, result in enumerate(results, start=1):
        print(f"\nBuilding {index}: {result.speed} ticks for an elevator to move between floors")
        print(f"Average wait time: {result.average_wait:.2f}")
        print(f"Average travel time: {result.average_travel:.2f}")
        print(f"Total passengers: {result.total_passengers}")
        print(f"Delivered passengers: {result.delivered_passengers}")
        if not result.completed:
            print(f"Incomplete: tick budget reached at t={result.end_time}")

    baseline = results[0]
    for result in results[1:]:
        wait = percent_reduction(baseline.average_wait, result.average_wait)
        travel = percent_reduction(baseline.average_travel, result.average_travel)
        print(f"\nSpeed {result.speed} vs {baseline.speed}:")
        print(f"  Reduction in average wait time: {wait:.1f}%")
        print(f"  Reduction in average travel time: {travel:.1f}%")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--passengers",
        type=Path,
        help="Passenger CSV (start_time,start_floor,end_floor); overrides the scenario",
    )
    parser.add_argument(
        "--speed",
        type=int,
        action="append",
        help="Ticks per floor; repeat to compare several buildings",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write run results as JSON",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        scenario = load_scenario(args.config)
        passengers = args.passengers or scenario.passengers
        if passengers is None:
            raise InvalidConfiguration("No passenger file given in the scenario or on the command line")
        arrivals = read_arrivals(passengers)
        results = run_scenario(scenario, arrivals, args.speed)
    except InvalidConfiguration as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    save_results(
        args.output,
        {
            "scenario": scenario.name or args.config.stem,
            "description": scenario.description,
            "runs": [result.to_dict() for result in results],
        },
    )

    if scenario.name:
        print(f"Scenario: {scenario.name}")
    if scenario.description:
        print(scenario.description)
    print_results(results)
    if args.output:
        print(f"\nSaved results to {args.output}")

    return 0 if all(result.completed for result in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
