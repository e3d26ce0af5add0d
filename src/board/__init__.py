"""Letter grid construction for the word search."""

from .models import (
    STEPS,
    Cell,
    ConfigurationError,
    Grid,
    HiddenWord,
    Orientation,
    WordSpec,
    orientation_for_index,
)
from .builder import ALPHABET, anchor_ranges, build, check_fit, resolve_seed
from .grid import intact_words, read_word, render_grid

__all__ = [
    # Models
    "STEPS",
    "Cell",
    "ConfigurationError",
    "Grid",
    "HiddenWord",
    "Orientation",
    "WordSpec",
    "orientation_for_index",
    # Construction
    "ALPHABET",
    "anchor_ranges",
    "build",
    "check_fit",
    "resolve_seed",
    # Grid utilities
    "intact_words",
    "read_word",
    "render_grid",
]
