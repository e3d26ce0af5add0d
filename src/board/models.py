"""Data models for the letter grid and the words hidden in it."""

from typing import Dict, List, Literal, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict, Field


# Type aliases
Orientation = Literal["H", "V"]
Cell = Tuple[int, int]  # (row, col)

# Step vector (d_row, d_col) taken from one letter of a word to the next
STEPS: Dict[str, Cell] = {
    "H": (0, 1),
    "V": (1, 0),
}


def orientation_for_index(index: int) -> Orientation:
    """Even positions in the word list run across, odd positions run down."""
    return "H" if index % 2 == 0 else "V"


class ConfigurationError(ValueError):
    """A hidden word cannot be placed in the configured grid."""

    def __init__(self, code: str, message: str, word: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.word = word


class WordSpec(BaseModel):
    """A configured hidden word, optionally pinned to a fixed anchor."""
    text: str = Field(..., min_length=1, pattern=r"^[A-Za-z]+$")
    anchor: Optional[Cell] = None

    def model_post_init(self, __context) -> None:
        self.text = self.text.lower()


class HiddenWord(BaseModel):
    """A word as actually placed in the grid."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    orientation: Orientation
    anchor: Cell

    @property
    def step(self) -> Cell:
        return STEPS[self.orientation]

    @property
    def cells(self) -> List[Cell]:
        """Every grid cell covered by the word, in letter order."""
        d_row, d_col = self.step
        row, col = self.anchor
        return [(row + i * d_row, col + i * d_col) for i in range(len(self.text))]


class Grid(BaseModel):
    """
    The finished letter grid.

    Rows are stored as strings so the grid cannot be changed once built.
    Renderers and the selection tracker share this value read-only.

    Attributes:
        rows: One string of letters per grid row
        seed: The seed the random letters and anchors were drawn with
        placements: Hidden words in the order they were written
    """
    model_config = ConfigDict(frozen=True)

    rows: Tuple[str, ...]
    seed: Optional[int] = None
    placements: Tuple[HiddenWord, ...] = ()

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        placements: Sequence[HiddenWord] = (),
        seed: Optional[int] = None,
    ) -> "Grid":
        """Build a grid directly from known rows of letters."""
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("Grid rows must be non-empty and of equal length")
        return cls(rows=tuple(rows), placements=tuple(placements), seed=seed)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def letter(self, row: int, col: int) -> str:
        if not self.contains(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.height}x{self.width} grid")
        return self.rows[row][col]

    def __getitem__(self, row: int) -> str:
        return self.rows[row]
