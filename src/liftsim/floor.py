from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from .passenger import Direction, Passenger


@dataclass
class Floor:
    """Represents a floor holding waiting and delivered passengers."""

    number: int
    waiting: Deque[Passenger] = field(default_factory=deque)
    delivered: List[Passenger] = field(default_factory=list)

    def add_waiting_passenger(self, passenger: Passenger) -> None:
        self.waiting.append(passenger)

    def has_waiting(self) -> bool:
        return bool(self.waiting)

    def has_waiting_in(self, direction: Direction) -> bool:
        return any(p.direction is direction for p in self.waiting)

    def board_passengers(self, direction: Direction, limit: int) -> List[Passenger]:
        """Remove and return up to ``limit`` passengers heading ``direction``.

        Passengers keep their arrival order; those travelling the other way
        stay queued in place.
        """
        boarded: List[Passenger] = []
        remaining: Deque[Passenger] = deque()
        while self.waiting:
            passenger = self.waiting.popleft()
            if len(boarded) < limit and passenger.direction is direction:
                boarded.append(passenger)
            else:
                remaining.append(passenger)
        self.waiting = remaining
        return boarded

    def deliver(self, passenger: Passenger) -> None:
        self.delivered.append(passenger)
