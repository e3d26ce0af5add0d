"""Drag selection over the word search grid."""

from .models import CompletionPolicy, OutOfBoundsInput, Phase, SelectionState, WordFound
from .rules import allowed_steps, find_completion, is_allowed_step, matches_prefix
from .tracker import SelectionTracker

__all__ = [
    "CompletionPolicy",
    "OutOfBoundsInput",
    "Phase",
    "SelectionState",
    "WordFound",
    "allowed_steps",
    "find_completion",
    "is_allowed_step",
    "matches_prefix",
    "SelectionTracker",
]
