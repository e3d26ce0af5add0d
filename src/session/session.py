import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..board import Cell, Grid, build, intact_words
from ..selection import OutOfBoundsInput, SelectionTracker, WordFound
from .events import to_cell
from .models import GameConfig, PointerDown, PointerEvent, PointerMove, PointerUp, SessionResult

_log = logging.getLogger(__name__)


class WordSearchSession(BaseModel):
    """
    Top-level owner of one word search game.

    Holds the configuration, the built grid and the selection tracker,
    translates pointer events into grid cells, and keeps the record of
    words found so far.

    Attributes:
        config: Session configuration
        grid: The letter grid (read-only once built)
        tracker: The selection tracker driven by pointer events
        found_words: Every WordFound event taken so far
        events_processed: Pointer events handled (dropped ones included)
        events_dropped: Pointer events outside the grid
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    grid: Grid
    tracker: SelectionTracker
    found_words: List[WordFound] = Field(default_factory=list)
    events_processed: int = 0
    events_dropped: int = 0
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        **config_kwargs: Any
    ) -> "WordSearchSession":
        """
        Factory method to build the grid and tracker from a configuration.

        Args:
            config: Optional GameConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            A ready WordSearchSession

        Raises:
            ConfigurationError: If the hidden words cannot be placed
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        grid = build(
            config.grid_width,
            config.grid_height,
            config.random_seed,
            config.hidden_words,
            anchor_mode=config.anchor_mode,
            collision_policy=config.collision_policy,
            max_attempts=config.max_placement_attempts,
        )
        tracker = SelectionTracker(grid=grid, completion_policy=config.completion_policy)

        _log.info(
            "session ready: %dx%d grid, %d hidden words, seed %s",
            grid.width, grid.height, len(grid.placements), grid.seed,
        )
        return cls(config=config, grid=grid, tracker=tracker, started_at=datetime.now())

    def handle(self, event: PointerEvent) -> bool:
        """
        Process one pointer event.

        Points outside the grid are dropped without touching the selection.

        Returns:
            True if a cell was accepted into the current attempt
        """
        self.events_processed += 1

        if isinstance(event, PointerUp):
            self.tracker.release()
            return False

        try:
            cell = to_cell(event.x, event.y, self.config.cell_size, self.grid)
        except OutOfBoundsInput:
            self.events_dropped += 1
            _log.debug("dropped %s event at (%d, %d)", event.kind, event.x, event.y)
            return False

        if isinstance(event, PointerDown):
            return self.tracker.press(cell)
        if isinstance(event, PointerMove):
            return self.tracker.move(cell)
        return False

    def take_word_found_events(self) -> List[WordFound]:
        """Take the tracker's new WordFound events and record them."""
        events = self.tracker.take_word_found_events()
        self.found_words.extend(events)
        return events

    def highlight_mask(self) -> List[List[bool]]:
        return self.tracker.highlight_mask()

    def found_cells(self) -> List[Cell]:
        return [cell for event in self.found_words for cell in event.cells]

    def remaining_words(self) -> List[str]:
        """Hidden words not yet found."""
        found = {event.word for event in self.found_words}
        return [p.text for p in self.grid.placements if p.text not in found]

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "selection": self.tracker.get_state(),
            "found_words": [event.word for event in self.found_words],
            "remaining_words": self.remaining_words(),
            "intact_words": intact_words(self.grid),
            "events_processed": self.events_processed,
            "events_dropped": self.events_dropped,
        }

    def get_result(self) -> SessionResult:
        """
        Get the session result.

        Returns:
            SessionResult containing the grid, placements and found words
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        return SessionResult(
            config=self.config,
            seed=self.grid.seed,
            grid=list(self.grid.rows),
            placements=list(self.grid.placements),
            found_words=self.found_words,
            remaining_words=self.remaining_words(),
            events_processed=self.events_processed,
            events_dropped=self.events_dropped,
            final_state=self.get_state(),
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the session result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, default=str)

    def run(
        self,
        events: Iterable[PointerEvent],
        on_event: Optional[Callable[[PointerEvent, List[WordFound]], None]] = None,
        verbose: bool = False,
    ) -> SessionResult:
        """
        Replay a sequence of pointer events.

        Args:
            events: Pointer events in the order they happened
            on_event: Optional callback called after each event with the
                words that event completed
            verbose: If True, print found words to stdout

        Returns:
            SessionResult after the last event
        """
        if verbose:
            print(f"Grid: {self.grid.width}x{self.grid.height}, seed {self.grid.seed}")
            print(f"Hidden words: {len(self.grid.placements)}")
            print("-" * 40)

        for event in events:
            self.handle(event)
            new_words = self.take_word_found_events()

            if verbose:
                for found in new_words:
                    print(f"Found '{found.word}' at {found.cells}")

            if on_event:
                on_event(event, new_words)

        if verbose:
            print("-" * 40)
            print(f"Found {len(self.found_words)} of {len(self.grid.placements)} words")

        return self.get_result()
