from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional

from .config import BuildingConfig
from .elevator import Elevator
from .errors import InvalidConfiguration, InvariantViolation
from .floor import Floor
from .intake import ArrivalRecord
from .passenger import Passenger
from .statistic import Statistic

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of one building run."""

    wait_time: Statistic
    travel_time: Statistic
    total_passengers: int
    delivered_passengers: int
    end_time: int
    completed: bool = True
    speed: Optional[int] = None
    snapshots: List[dict] = field(default_factory=list)

    @property
    def average_wait(self) -> float:
        return self.wait_time.average()

    @property
    def average_travel(self) -> float:
        return self.travel_time.average()

    def to_dict(self) -> dict:
        return {
            "speed": self.speed,
            "completed": self.completed,
            "end_time": self.end_time,
            "total_passengers": self.total_passengers,
            "delivered_passengers": self.delivered_passengers,
            "wait_time": _json_safe(self.wait_time.describe()),
            "travel_time": _json_safe(self.travel_time.describe()),
            "snapshots": self.snapshots,
        }


def _json_safe(values: Dict[str, float]) -> Dict[str, Optional[float]]:
    return {
        key: None if isinstance(value, float) and math.isnan(value) else value
        for key, value in values.items()
    }


class Building:
    """Owns floors, elevators and the arrival backlog, and drives the clock.

    Each tick moves newly arrived passengers onto their floors, updates every
    elevator whose activation offset has been reached, then advances time by
    one. The run ends once nobody is queued, waiting or riding.
    """

    def __init__(self, config: BuildingConfig, arrivals: Iterable[ArrivalRecord] = ()) -> None:
        self.config = config
        self.num_floors = config.num_floors
        self.num_elevators = config.num_elevators
        self.current_time: int = 0
        self.floors: List[Floor] = [Floor(i + 1) for i in range(self.num_floors)]
        constraints = config.constraints
        self.elevators: List[Elevator] = [
            Elevator(
                elevator_id=i,
                speed=constraints.speed,
                stop_dwell=constraints.stop_dwell,
                capacity=constraints.capacity,
            )
            for i in range(self.num_elevators)
        ]
        self.intake: Deque[Passenger] = self._admit(arrivals)
        self.total_passengers = len(self.intake)
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    def _admit(self, arrivals: Iterable[ArrivalRecord]) -> Deque[Passenger]:
        queue: Deque[Passenger] = deque()
        for passenger_id, record in enumerate(arrivals, start=1):
            passenger = Passenger(
                passenger_id=passenger_id,
                start_time=record.start_time,
                start_floor=record.start_floor,
                end_floor=record.end_floor,
                top_floor=self.num_floors,
            )
            if queue and passenger.start_time < queue[-1].start_time:
                raise InvalidConfiguration(
                    f"Passenger {passenger_id} arrives at {passenger.start_time}, "
                    f"before the previous arrival at {queue[-1].start_time}"
                )
            queue.append(passenger)
        return queue

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def is_quiescent(self) -> bool:
        if self.intake:
            return False
        if any(floor.has_waiting() for floor in self.floors):
            return False
        return not any(elevator.has_passengers() for elevator in self.elevators)

    def step(self) -> None:
        self._admit_arrivals()
        for index, elevator in enumerate(self.elevators):
            if self.current_time >= self.config.activation_offset(index):
                elevator.update(self.current_time, self.num_floors, self.floors)
        self.current_time += 1
        if self.event_hooks.get("tick"):
            self._emit("tick", self.snapshot())

    def run(self) -> SimulationResult:
        logger.info(
            "Simulating %s passengers: %s floors, %s elevators, speed %s, dwell %s",
            self.total_passengers,
            self.num_floors,
            self.num_elevators,
            self.config.constraints.speed,
            self.config.constraints.stop_dwell,
        )
        max_ticks = self.config.max_ticks
        completed = True
        while not self.is_quiescent():
            if max_ticks is not None and self.current_time >= max_ticks:
                completed = False
                logger.warning(
                    "Tick budget of %s exhausted with passengers still in the building",
                    max_ticks,
                )
                break
            self.step()

        result = self._collect_statistics(completed)
        logger.info(
            "Finished at t=%s: delivered %s/%s, average wait %.2f, average travel %.2f",
            result.end_time,
            result.delivered_passengers,
            result.total_passengers,
            result.average_wait,
            result.average_travel,
        )
        self._emit("finish", result)
        return result

    def snapshot(self) -> dict:
        return {
            "time": self.current_time,
            "intake": len(self.intake),
            "floors": [len(floor.waiting) for floor in self.floors],
            "elevators": [elevator.snapshot() for elevator in self.elevators],
        }

    def _admit_arrivals(self) -> None:
        count = 0
        while self.intake and self.intake[0].start_time == self.current_time:
            passenger = self.intake.popleft()
            self.floors[passenger.start_floor - 1].add_waiting_passenger(passenger)
            count += 1
        if count:
            self._emit("arrival", {"time": self.current_time, "count": count})

    def _collect_statistics(self, completed: bool) -> SimulationResult:
        wait_stat = Statistic()
        travel_stat = Statistic()
        seen = set()
        for floor in self.floors:
            for passenger in floor.delivered:
                wait_stat.add_number(passenger.wait_time)
                travel_stat.add_number(passenger.travel_time)
                seen.add(passenger.passenger_id)
        delivered = wait_stat.count

        if len(seen) != delivered:
            raise InvariantViolation(
                f"{delivered - len(seen)} passengers were delivered more than once"
            )
        if completed and delivered != self.total_passengers:
            raise InvariantViolation(
                f"Delivered {delivered} of {self.total_passengers} passengers"
            )

        return SimulationResult(
            wait_time=wait_stat,
            travel_time=travel_stat,
            total_passengers=self.total_passengers,
            delivered_passengers=delivered,
            end_time=self.current_time,
            completed=completed,
            speed=self.config.constraints.speed,
        )

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
