"""Reading passenger arrival records from CSV files."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List, NamedTuple, Union

from .errors import InvalidConfiguration


class ArrivalRecord(NamedTuple):
    start_time: int
    start_floor: int
    end_floor: int


def parse_arrivals(lines: Iterable[str]) -> List[ArrivalRecord]:
    """Parse ``time,start_floor,end_floor`` rows, skipping the header row.

    Blank rows are ignored. Any other row that is not three integers raises
    ``InvalidConfiguration`` with its line number.
    """
    records: List[ArrivalRecord] = []
    reader = csv.reader(lines)
    for row in reader:
        if reader.line_num == 1:
            continue
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) != 3:
            raise InvalidConfiguration(
                f"line {reader.line_num}: expected 3 columns, got {len(row)}"
            )
        try:
            records.append(ArrivalRecord(*(int(cell) for cell in row)))
        except ValueError:
            raise InvalidConfiguration(
                f"line {reader.line_num}: non-integer value in {row!r}"
            ) from None
    return records


def read_arrivals(path: Union[str, Path]) -> List[ArrivalRecord]:
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8") as handle:
            return parse_arrivals(handle)
    except FileNotFoundError:
        raise InvalidConfiguration(f"Passenger file not found: {path}") from None
