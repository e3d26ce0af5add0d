"""
Pydantic models for the session layer.

This module contains the game configuration, the pointer events fed in by
the windowing layer, and the saved session result.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

from ..board.models import HiddenWord, WordSpec
from ..selection.models import CompletionPolicy, WordFound


DEFAULT_HIDDEN_WORDS = ["code", "int", "mobile", "java", "programs"]


class GameConfig(BaseModel):
    """Configuration for a word search session."""
    window_width: int = Field(default=640, ge=1)
    window_height: int = Field(default=480, ge=1)
    cell_size: int = Field(default=40, ge=1)
    grid_width: Optional[int] = Field(default=None, ge=1)
    grid_height: Optional[int] = Field(default=None, ge=1)
    hidden_words: List[WordSpec] = Field(
        default_factory=lambda: [WordSpec(text=w) for w in DEFAULT_HIDDEN_WORDS]
    )
    random_seed: Optional[int] = None
    anchor_mode: Literal["fit", "legacy"] = "fit"
    collision_policy: Literal["retry", "overwrite"] = "retry"
    max_placement_attempts: int = Field(default=100, ge=1)
    completion_policy: CompletionPolicy = "legacy"

    @field_validator("hidden_words", mode="before")
    @classmethod
    def _wrap_plain_words(cls, value: Any) -> Any:
        """Allow plain strings in the word list."""
        if isinstance(value, list):
            return [{"text": item} if isinstance(item, str) else item for item in value]
        return value

    def model_post_init(self, __context) -> None:
        """Derive grid dimensions from the window size when not given."""
        if self.grid_width is None:
            self.grid_width = self.window_width // self.cell_size
        if self.grid_height is None:
            self.grid_height = self.window_height // self.cell_size


class PointerDown(BaseModel):
    kind: Literal["down"] = "down"
    x: int
    y: int


class PointerMove(BaseModel):
    kind: Literal["move"] = "move"
    x: int
    y: int


class PointerUp(BaseModel):
    kind: Literal["up"] = "up"


PointerEvent = Annotated[Union[PointerDown, PointerMove, PointerUp], Field(discriminator="kind")]


class SessionResult(BaseModel):
    """Result of a replayed session."""
    config: GameConfig
    seed: Optional[int] = None
    grid: List[str] = Field(default_factory=list)
    placements: List[HiddenWord] = Field(default_factory=list)
    found_words: List[WordFound] = Field(default_factory=list)
    remaining_words: List[str] = Field(default_factory=list)
    events_processed: int = 0
    events_dropped: int = 0
    final_state: Dict = Field(default_factory=dict)
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
