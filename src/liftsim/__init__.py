"""Tick-driven SCAN elevator simulation."""

from .building import Building, SimulationResult
from .config import (
    REFERENCE_ACTIVATION_OFFSETS,
    BuildingConfig,
    ElevatorConstraints,
    ScenarioConfig,
    load_scenario,
    parse_building_config,
)
from .elevator import Elevator, ElevatorState
from .errors import InvalidConfiguration, InvariantViolation, LiftSimError
from .floor import Floor
from .intake import ArrivalRecord, parse_arrivals, read_arrivals
from .passenger import Direction, Passenger
from .statistic import Statistic

__all__ = [
    "ArrivalRecord",
    "Building",
    "BuildingConfig",
    "Direction",
    "Elevator",
    "ElevatorConstraints",
    "ElevatorState",
    "Floor",
    "InvalidConfiguration",
    "InvariantViolation",
    "LiftSimError",
    "Passenger",
    "REFERENCE_ACTIVATION_OFFSETS",
    "ScenarioConfig",
    "SimulationResult",
    "Statistic",
    "load_scenario",
    "parse_arrivals",
    "parse_building_config",
    "read_arrivals",
]
