from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from enum import Enum
from typing import Optional

from .errors import InvalidConfiguration, InvariantViolation

DEFAULT_MAX_FLOORS = 100


class Direction(Enum):
    UP = 1
    DOWN = -1

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP


@dataclass
class Passenger:
    """Represents a rider moving between two floors."""

    passenger_id: int
    start_time: int
    start_floor: int
    end_floor: int
    top_floor: InitVar[int] = DEFAULT_MAX_FLOORS
    direction: Direction = field(init=False)
    board_time: Optional[int] = field(default=None, init=False)
    alight_time: Optional[int] = field(default=None, init=False)

    def __post_init__(self, top_floor: int) -> None:
        if self.start_time < 0:
            raise InvalidConfiguration(
                f"Passenger {self.passenger_id}: start time {self.start_time} is negative"
            )
        for floor in (self.start_floor, self.end_floor):
            if not 1 <= floor <= top_floor:
                raise InvalidConfiguration(
                    f"Passenger {self.passenger_id}: floor {floor} outside [1, {top_floor}]"
                )
        if self.start_floor == self.end_floor:
            raise InvalidConfiguration(
                f"Passenger {self.passenger_id}: start and end floor are both {self.start_floor}"
            )
        self.direction = Direction.UP if self.end_floor > self.start_floor else Direction.DOWN

    def record_boarding(self, time_step: int) -> None:
        if self.board_time is not None:
            raise InvariantViolation(f"Passenger {self.passenger_id} boarded twice")
        self.board_time = time_step

    def record_alighting(self, time_step: int) -> None:
        if self.board_time is None:
            raise InvariantViolation(
                f"Passenger {self.passenger_id} alighted without boarding"
            )
        if self.alight_time is not None:
            raise InvariantViolation(f"Passenger {self.passenger_id} alighted twice")
        self.alight_time = time_step

    @property
    def wait_time(self) -> Optional[int]:
        """Ticks between arrival on the floor and boarding."""
        if self.board_time is None:
            return None
        return self.board_time - self.start_time

    @property
    def travel_time(self) -> Optional[int]:
        """Ticks between boarding and reaching the destination floor."""
        if self.board_time is None or self.alight_time is None:
            return None
        return self.alight_time - self.board_time

    @property
    def delivered(self) -> bool:
        return self.alight_time is not None
