"""Word search session: configuration, pointer events and results."""

from .models import (
    DEFAULT_HIDDEN_WORDS,
    GameConfig,
    PointerDown,
    PointerEvent,
    PointerMove,
    PointerUp,
    SessionResult,
)
from .events import load_events, parse_events, to_cell
from .session import WordSearchSession

__all__ = [
    "DEFAULT_HIDDEN_WORDS",
    "GameConfig",
    "PointerDown",
    "PointerEvent",
    "PointerMove",
    "PointerUp",
    "SessionResult",
    "load_events",
    "parse_events",
    "to_cell",
    "WordSearchSession",
]
