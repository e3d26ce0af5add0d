"""Acceptance and completion rules for an attempt."""

from typing import Iterable, Optional, Sequence, Set

from ..board.models import STEPS, Cell, HiddenWord
from .models import CompletionPolicy


def matches_prefix(words: Sequence[str], letter: str, progress: int) -> bool:
    """Check if some word has `letter` at index `progress`."""
    return any(progress < len(word) and word[progress] == letter for word in words)


def allowed_steps(hidden_words: Iterable[HiddenWord]) -> Set[Cell]:
    """Step vectors of the orientations the hidden words were placed in."""
    return {STEPS[word.orientation] for word in hidden_words}


def is_allowed_step(anchor: Cell, cell: Cell, steps: Set[Cell]) -> bool:
    """Check if `cell` is exactly one allowed step away from `anchor`."""
    return (cell[0] - anchor[0], cell[1] - anchor[1]) in steps


def find_completion(
    words: Sequence[str],
    letters: str,
    policy: CompletionPolicy = "legacy",
) -> Optional[str]:
    """
    Find the hidden word an attempt completes, if any.

    The "legacy" policy only compares the attempt's length and its last
    letter, so an attempt over unrelated letters can still complete a word.
    The "strict" policy requires the whole attempt to spell the word.

    Returns:
        The first matching word in list order, or None
    """
    if not letters:
        return None

    for word in words:
        if policy == "strict":
            if word == letters:
                return word
        elif len(word) == len(letters) and word[-1] == letters[-1]:
            return word
    return None
