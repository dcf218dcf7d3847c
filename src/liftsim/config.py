from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import InvalidConfiguration
from .passenger import DEFAULT_MAX_FLOORS

# Tick at which each of the four reference elevators starts running.
REFERENCE_ACTIVATION_OFFSETS = (0, 100, 500, 700)


class ElevatorConstraints(BaseModel):
    """Per-car constants shared by every elevator in a building."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    capacity: int = Field(8, gt=0)
    speed: int = Field(10, gt=0, description="Ticks to travel one floor")
    stop_dwell: int = Field(2, gt=0, description="Ticks spent stopping at a floor")


class BuildingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    num_floors: int = Field(gt=0)
    num_elevators: int = Field(gt=0)
    constraints: ElevatorConstraints = Field(default_factory=ElevatorConstraints)
    activation_offsets: List[int] = Field(default_factory=list)
    max_floors: int = Field(DEFAULT_MAX_FLOORS, gt=0)
    max_ticks: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def _check_limits(self) -> "BuildingConfig":
        if self.num_floors > self.max_floors:
            raise ValueError(
                f"num_floors {self.num_floors} exceeds max_floors {self.max_floors}"
            )
        if len(self.activation_offsets) > self.num_elevators:
            raise ValueError(
                f"{len(self.activation_offsets)} activation offsets for "
                f"{self.num_elevators} elevators"
            )
        if any(offset < 0 for offset in self.activation_offsets):
            raise ValueError("activation offsets must be non-negative")
        return self

    def activation_offset(self, index: int) -> int:
        if index < len(self.activation_offsets):
            return self.activation_offsets[index]
        return 0

    def with_speed(self, speed: int) -> "BuildingConfig":
        constraints = self.constraints.model_copy(update={"speed": speed})
        return parse_building_config(
            {**self.model_dump(), "constraints": constraints.model_dump()}
        )


class ScenarioConfig(BaseModel):
    """A runnable scenario as stored in a JSON file."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    passengers: Optional[Path] = None
    building: BuildingConfig
    compare_speeds: List[int] = Field(default_factory=list)
    snapshot_interval: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_speeds(self) -> "ScenarioConfig":
        if any(speed <= 0 for speed in self.compare_speeds):
            raise ValueError("compare_speeds must be positive")
        return self


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "config"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def parse_building_config(data: Dict[str, Any]) -> BuildingConfig:
    try:
        return BuildingConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfiguration(_describe(exc)) from exc


def parse_scenario(data: Dict[str, Any], base_dir: Optional[Path] = None) -> ScenarioConfig:
    try:
        scenario = ScenarioConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfiguration(_describe(exc)) from exc
    if scenario.passengers is not None and base_dir is not None:
        if not scenario.passengers.is_absolute():
            scenario.passengers = base_dir / scenario.passengers
    return scenario


def load_scenario(path: Union[str, Path]) -> ScenarioConfig:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InvalidConfiguration(f"Scenario file not found: {path}") from None
    except json.JSONDecodeError as exc:
        raise InvalidConfiguration(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{path}: expected a JSON object")
    return parse_scenario(data, base_dir=path.parent)
