"""
Selection tracker: follows one drag at a time over the grid.

A press starts an attempt, each move onto a new cell may extend it, and a
release drops it. A cell extends the attempt only when some hidden word has
its letter at the current position and the cell is one step (right for
across words, down for down words) from the last accepted cell.
"""

import logging
from typing import Dict, List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field

from ..board.models import Cell, Grid, HiddenWord
from .models import CompletionPolicy, OutOfBoundsInput, SelectionState, WordFound
from .rules import allowed_steps, find_completion, is_allowed_step, matches_prefix

_log = logging.getLogger(__name__)


class SelectionTracker(BaseModel):
    """
    State machine for the attempt in progress.

    The tracker reads letters from the grid but never changes it. Completed
    words are queued as WordFound events until taken.

    Steps are limited to the orientations the hidden words actually use: with
    only across words a downward step is rejected, and vice versa.

    Attributes:
        grid: The finished letter grid
        hidden_words: Placed words to match against (None: the grid's placements;
            an empty list matches nothing)
        completion_policy: "legacy" (length and last letter) or "strict" (full spelling)
        state: The current SelectionState
        path: Cells accepted in the current attempt, in order
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    grid: Grid
    hidden_words: Optional[List[HiddenWord]] = None
    completion_policy: CompletionPolicy = "legacy"
    state: SelectionState = Field(default_factory=SelectionState)
    path: List[Cell] = Field(default_factory=list)
    found_events: List[WordFound] = Field(default_factory=list)
    _words: List[str] = []
    _steps: Set[Cell] = set()

    def model_post_init(self, __context) -> None:
        """Default to the grid's own placements and cache the word texts."""
        if self.hidden_words is None:
            self.hidden_words = list(self.grid.placements)
        self._words = [word.text for word in self.hidden_words]
        self._steps = allowed_steps(self.hidden_words)

    @property
    def is_tracking(self) -> bool:
        return self.state.phase == "tracking"

    @property
    def progress(self) -> int:
        return self.state.progress

    def press(self, cell: Cell) -> bool:
        """
        Start a new attempt at `cell`.

        Any attempt still in progress is discarded first.

        Returns:
            True if the cell was accepted as the first letter
        """
        self._check_bounds(cell)
        self._reset("tracking")
        return self._visit(cell)

    def move(self, cell: Cell) -> bool:
        """
        Move the pointer onto `cell` while pressed.

        Moves while idle, and moves within the active cell, are ignored.

        Returns:
            True if the cell extended the attempt
        """
        self._check_bounds(cell)
        if not self.is_tracking:
            return False
        return self._visit(cell)

    def release(self) -> None:
        """End the drag, dropping any partial attempt."""
        if not self.is_tracking:
            return
        if self.path:
            _log.debug("released with %d letter(s) unmatched", len(self.path))
        self._reset("idle")

    def current_highlights(self) -> List[Cell]:
        """Cells accepted in the current attempt."""
        return list(self.path)

    def is_highlighted(self, row: int, col: int) -> bool:
        return (row, col) in self.path

    def highlight_mask(self) -> List[List[bool]]:
        """One flag per grid cell, True where the cell is highlighted."""
        highlighted = set(self.path)
        return [
            [(row, col) in highlighted for col in range(self.grid.width)]
            for row in range(self.grid.height)
        ]

    def take_word_found_events(self) -> List[WordFound]:
        """Return and clear the queued WordFound events."""
        events = self.found_events
        self.found_events = []
        return events

    def get_state(self) -> Dict:
        """
        Get the current selection state as a dictionary.

        Returns:
            Dictionary containing selection state
        """
        return {
            "phase": self.state.phase,
            "active_cell": self.state.active_cell,
            "progress": self.state.progress,
            "anchor": self.state.anchor,
            "highlights": self.current_highlights(),
            "pending_events": len(self.found_events),
            "completion_policy": self.completion_policy,
        }

    def _check_bounds(self, cell: Cell) -> None:
        if not self.grid.contains(*cell):
            raise OutOfBoundsInput(
                f"Cell {cell} is outside a {self.grid.height}x{self.grid.width} grid"
            )

    def _reset(self, phase: str) -> None:
        self.state = SelectionState(phase=phase)
        self.path = []

    def _visit(self, cell: Cell) -> bool:
        """Evaluate the pointer entering `cell`; accept it or leave state as is."""
        if cell == self.state.active_cell:
            return False
        self.state.active_cell = cell

        letter = self.grid.letter(*cell)
        progress = self.state.progress

        if not matches_prefix(self._words, letter, progress):
            _log.debug("rejected %s '%s': no word has it at position %d", cell, letter, progress)
            return False

        if progress > 0 and not is_allowed_step(self.state.anchor, cell, self._steps):
            _log.debug("rejected %s: not one step on from %s", cell, self.state.anchor)
            return False

        self.path.append(cell)
        self.state.anchor = cell
        self.state.progress = progress + 1

        letters = "".join(self.grid.letter(*c) for c in self.path)
        word = find_completion(self._words, letters, self.completion_policy)
        if word is not None:
            self._complete(word, letters)
        return True

    def _complete(self, word: str, letters: str) -> None:
        event = WordFound(word=word, letters=letters, cells=list(self.path))
        self.found_events.append(event)
        _log.info("found '%s' at %s", word, event.cells)
        self._reset("idle")
