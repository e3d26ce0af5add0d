"""Data models for tracking a drag across the grid."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from ..board.models import Cell


# Type aliases
Phase = Literal["idle", "tracking"]
CompletionPolicy = Literal["legacy", "strict"]


class OutOfBoundsInput(ValueError):
    """A pointer position that does not land on a grid cell."""


class SelectionState(BaseModel):
    """
    State of the attempt in progress.

    Attributes:
        phase: "tracking" between a press and the next release or completion
        active_cell: The cell currently under the pointer
        progress: Number of letters accepted so far in this attempt
        anchor: The last accepted cell (set whenever progress > 0)
    """
    phase: Phase = "idle"
    active_cell: Optional[Cell] = None
    progress: int = Field(default=0, ge=0)
    anchor: Optional[Cell] = None


class WordFound(BaseModel):
    """Emitted when an attempt completes a hidden word."""
    word: str  # The hidden word the attempt was matched against
    letters: str  # Letters actually traversed
    cells: List[Cell] = Field(default_factory=list)
