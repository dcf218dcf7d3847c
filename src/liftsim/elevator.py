from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .errors import InvalidConfiguration
from .floor import Floor
from .passenger import Direction, Passenger

logger = logging.getLogger(__name__)


class ElevatorState(Enum):
    STOPPED = "stopped"
    STOPPING = "stopping"
    MOVING_UP = "moving_up"
    MOVING_DOWN = "moving_down"


@dataclass
class Elevator:
    """A SCAN elevator advanced one tick at a time by the building.

    The car sweeps in ``direction`` until it reaches floor 1 or the top floor
    and only reverses there. It stops on the way for riders getting off and for
    riders waiting to travel its way, even when it has no room left for them.
    """

    elevator_id: int
    speed: int = 10
    stop_dwell: int = 2
    capacity: int = 8
    current_floor: int = 1
    direction: Direction = Direction.UP
    state: ElevatorState = ElevatorState.STOPPED
    next_action_time: int = 0
    passengers: List[Passenger] = field(default_factory=list)
    _arrived_at: int = 0
    _last_update: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("speed", "stop_dwell", "capacity"):
            if getattr(self, name) <= 0:
                raise InvalidConfiguration(
                    f"Elevator {self.elevator_id}: {name} must be positive"
                )

    def has_passengers(self) -> bool:
        return bool(self.passengers)

    def update(self, current_time: int, num_floors: int, floors: Sequence[Floor]) -> None:
        """Advance the car by one tick.

        ``floors`` is indexed by ``floor number - 1``. Only the floor the car
        currently occupies is read or changed.
        """
        if self._last_update is not None and current_time <= self._last_update:
            return
        self._last_update = current_time

        if self.state is ElevatorState.STOPPED:
            self._serve_floor(current_time, num_floors, floors)
        elif self.state is ElevatorState.STOPPING:
            if current_time >= self.next_action_time:
                self._set_state(ElevatorState.STOPPED, current_time)
        elif current_time >= self.next_action_time:
            self._arrive_at_next_floor(current_time, num_floors, floors)

    def should_stop_at_floor(self, floor: Floor) -> bool:
        if any(p.end_floor == floor.number for p in self.passengers):
            return True
        if len(self.passengers) > self.capacity:
            return False
        return floor.has_waiting_in(self.direction)

    def _serve_floor(self, current_time: int, num_floors: int, floors: Sequence[Floor]) -> None:
        floor = floors[self.current_floor - 1]
        if self.passengers:
            self._drop_off(floor)

        self._face_outward_at_terminal(num_floors)

        if floor.has_waiting():
            self._pick_up(floor, current_time)

        if self.passengers or any(f.has_waiting() for f in floors):
            self._depart(current_time, num_floors)

    def _drop_off(self, floor: Floor) -> None:
        remaining: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.end_floor == floor.number:
                passenger.record_alighting(self._arrived_at)
                floor.deliver(passenger)
                logger.debug(
                    "elevator %s: passenger %s alighted at floor %s (travel %s)",
                    self.elevator_id,
                    passenger.passenger_id,
                    floor.number,
                    passenger.travel_time,
                )
            else:
                remaining.append(passenger)
        self.passengers = remaining

    def _pick_up(self, floor: Floor, current_time: int) -> None:
        free_space = self.capacity - len(self.passengers)
        if free_space <= 0:
            return
        boarded = floor.board_passengers(self.direction, free_space)
        for passenger in boarded:
            passenger.record_boarding(current_time)
            logger.debug(
                "elevator %s: passenger %s boarded at floor %s (wait %s)",
                self.elevator_id,
                passenger.passenger_id,
                floor.number,
                passenger.wait_time,
            )
        self.passengers.extend(boarded)

    def _depart(self, current_time: int, num_floors: int) -> None:
        if self.direction is Direction.UP and self.current_floor < num_floors:
            self._set_state(ElevatorState.MOVING_UP, current_time)
        elif self.direction is Direction.DOWN and self.current_floor > 1:
            self._set_state(ElevatorState.MOVING_DOWN, current_time)
        else:
            return
        self.next_action_time = current_time + self.speed

    def _arrive_at_next_floor(
        self, current_time: int, num_floors: int, floors: Sequence[Floor]
    ) -> None:
        self.current_floor += self.direction.value
        self._arrived_at = current_time
        self._face_outward_at_terminal(num_floors)

        if self.should_stop_at_floor(floors[self.current_floor - 1]):
            self._set_state(ElevatorState.STOPPING, current_time)
            self.next_action_time = current_time + self.stop_dwell - 1
            return

        moving = (
            ElevatorState.MOVING_UP
            if self.direction is Direction.UP
            else ElevatorState.MOVING_DOWN
        )
        self._set_state(moving, current_time)
        self.next_action_time = current_time + self.speed

    def _face_outward_at_terminal(self, num_floors: int) -> None:
        if self.current_floor == num_floors and self.current_floor > 1:
            self.direction = Direction.DOWN
        elif self.current_floor == 1:
            self.direction = Direction.UP

    def _set_state(self, state: ElevatorState, current_time: int) -> None:
        if state is not self.state:
            logger.debug(
                "t=%s elevator %s: %s -> %s at floor %s",
                current_time,
                self.elevator_id,
                self.state.value,
                state.value,
                self.current_floor,
            )
        self.state = state

    def snapshot(self) -> dict:
        return {
            "id": self.elevator_id,
            "floor": self.current_floor,
            "direction": self.direction.name,
            "state": self.state.value,
            "passenger_count": len(self.passengers),
            "capacity": self.capacity,
        }
