"""Pointer event utilities: pixel translation and event scripts."""

import json
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import TypeAdapter

from ..board.models import Cell, Grid
from ..selection.models import OutOfBoundsInput
from .models import PointerEvent

_EVENT_LIST = TypeAdapter(List[PointerEvent])


def to_cell(x: int, y: int, cell_size: int, grid: Grid) -> Cell:
    """
    Convert pixel coordinates to the (row, col) of the cell under them.

    Raises:
        OutOfBoundsInput: If the point is not over any grid cell
    """
    row, col = y // cell_size, x // cell_size
    if not grid.contains(row, col):
        raise OutOfBoundsInput(f"Point ({x}, {y}) is outside the grid")
    return row, col


def parse_events(data: Any) -> List[PointerEvent]:
    """
    Parse an event script into pointer events.

    Accepts either a list of events or a mapping with an `events` list,
    each event being `{kind: down|move|up, x, y}`.
    """
    if isinstance(data, dict):
        data = data.get("events", [])
    if data is None:
        return []
    return _EVENT_LIST.validate_python(data)


def load_events(path: str | Path) -> List[PointerEvent]:
    """Load an event script from a YAML or JSON file."""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Event script not found: {path}")

    with open(path) as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    return parse_events(data)
