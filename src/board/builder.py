"""
Grid construction: random letters with the hidden words written over them.

Every word is checked against the grid bounds before a single cell is
filled, so a bad configuration never yields a partial grid.
"""

import logging
import random
import string
import time
from typing import List, Literal, Optional, Sequence, Set, Tuple, Union

from .models import (
    Cell,
    ConfigurationError,
    Grid,
    HiddenWord,
    Orientation,
    WordSpec,
    orientation_for_index,
)

_log = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase

AnchorMode = Literal["fit", "legacy"]
CollisionPolicy = Literal["retry", "overwrite"]

# Legacy anchor ranges: across words start in one of the
# first 10 rows and 3 columns, down words in one of the first 3 rows and 10 columns
LEGACY_LONG_RANGE = 10
LEGACY_SHORT_RANGE = 3

DEFAULT_MAX_ATTEMPTS = 100

# (row range, col range), both half-open
AnchorRange = Tuple[range, range]


def resolve_seed(seed: Optional[int] = None) -> int:
    """Return the given seed, or one taken from the current time."""
    if seed is not None:
        return seed
    return int(time.time())


def as_word_spec(word: Union[str, WordSpec]) -> WordSpec:
    if isinstance(word, WordSpec):
        return word
    return WordSpec(text=word)


def anchor_ranges(
    length: int,
    orientation: Orientation,
    width: int,
    height: int,
    anchor_mode: AnchorMode = "fit",
) -> AnchorRange:
    """
    Get the rows and columns a word's first letter may be drawn from.

    In "fit" mode the ranges cover every anchor that keeps the word inside
    the grid. In "legacy" mode they are the fixed LEGACY_* ranges, which
    may stick out of a small grid; check_fit() catches that.
    """
    if anchor_mode == "legacy":
        if orientation == "H":
            return range(LEGACY_LONG_RANGE), range(LEGACY_SHORT_RANGE)
        return range(LEGACY_SHORT_RANGE), range(LEGACY_LONG_RANGE)

    if orientation == "H":
        return range(height), range(width - length + 1)
    return range(height - length + 1), range(width)


def _fits(cells: List[Cell], width: int, height: int) -> bool:
    return all(0 <= row < height and 0 <= col < width for row, col in cells)


def check_fit(
    specs: Sequence[WordSpec],
    width: int,
    height: int,
    anchor_mode: AnchorMode = "fit",
) -> None:
    """
    Make sure every word can be placed before the grid is touched.

    Raises:
        ConfigurationError: If a word is too long for its orientation, a
            fixed anchor pushes it off the grid, or a legacy anchor range
            reaches outside the grid
    """
    if width < 1 or height < 1:
        raise ConfigurationError(
            "EMPTY_GRID",
            f"Grid must have at least one cell (got {width}x{height})",
        )

    for index, spec in enumerate(specs):
        orientation = orientation_for_index(index)
        length = len(spec.text)
        span = width if orientation == "H" else height
        axis = "columns" if orientation == "H" else "rows"

        if length > span:
            raise ConfigurationError(
                "WORD_DOES_NOT_FIT",
                f"'{spec.text}' ({length} letters, {orientation}) does not fit in {span} {axis}",
                word=spec.text,
            )

        if spec.anchor is not None:
            placed = HiddenWord(text=spec.text, orientation=orientation, anchor=spec.anchor)
            if not _fits(placed.cells, width, height):
                raise ConfigurationError(
                    "ANCHOR_OUT_OF_RANGE",
                    f"'{spec.text}' anchored at {spec.anchor} ({orientation}) runs off a {height}x{width} grid",
                    word=spec.text,
                )
            continue

        rows, cols = anchor_ranges(length, orientation, width, height, anchor_mode)
        last = HiddenWord(text=spec.text, orientation=orientation, anchor=(rows[-1], cols[-1]))
        if not _fits(last.cells, width, height):
            raise ConfigurationError(
                "ANCHOR_OUT_OF_RANGE",
                f"'{spec.text}' ({orientation}) can start at {last.anchor} in {anchor_mode} mode, "
                f"which runs off a {height}x{width} grid",
                word=spec.text,
            )


def _choose_anchor(rng: random.Random, rows: range, cols: range) -> Cell:
    row = rows[rng.randrange(len(rows))]
    col = cols[rng.randrange(len(cols))]
    return row, col


def _place(
    rng: random.Random,
    spec: WordSpec,
    orientation: Orientation,
    width: int,
    height: int,
    claimed: Set[Cell],
    reserved: Set[Cell],
    anchor_mode: AnchorMode,
    collision_policy: CollisionPolicy,
    max_attempts: int,
) -> HiddenWord:
    """
    Pick the word's anchor, re-drawing it on collisions under the retry policy.

    `claimed` holds the cells of words already written; `reserved` holds the
    cells of every fixed-anchor word, which random anchors must also avoid.
    """
    if spec.anchor is not None:
        placed = HiddenWord(text=spec.text, orientation=orientation, anchor=spec.anchor)
        if collision_policy == "retry" and claimed.intersection(placed.cells):
            raise ConfigurationError(
                "ANCHOR_COLLISION",
                f"'{spec.text}' anchored at {spec.anchor} shares cells with an earlier word",
                word=spec.text,
            )
        return placed

    rows, cols = anchor_ranges(len(spec.text), orientation, width, height, anchor_mode)

    if collision_policy == "overwrite":
        anchor = _choose_anchor(rng, rows, cols)
        return HiddenWord(text=spec.text, orientation=orientation, anchor=anchor)

    taken = claimed | reserved
    for attempt in range(max_attempts):
        anchor = _choose_anchor(rng, rows, cols)
        placed = HiddenWord(text=spec.text, orientation=orientation, anchor=anchor)
        if not taken.intersection(placed.cells):
            return placed
        _log.debug("'%s' at %s collides, retrying (attempt %d)", spec.text, anchor, attempt + 1)

    raise ConfigurationError(
        "PLACEMENT_FAILED",
        f"Could not place '{spec.text}' without overlapping another word after {max_attempts} attempts",
        word=spec.text,
    )


def build(
    width: int,
    height: int,
    seed: Optional[int],
    hidden_words: Sequence[Union[str, WordSpec]],
    anchor_mode: AnchorMode = "fit",
    collision_policy: CollisionPolicy = "retry",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Grid:
    """
    Build a grid of random letters with the hidden words written into it.

    Words are written in list order: even positions across (left to right),
    odd positions down (top to bottom). Under the "overwrite" policy a later
    word replaces the letters of any earlier word it crosses; under "retry"
    a fresh anchor is drawn until the word lands on cells no earlier word
    holds and no fixed-anchor word needs.

    Args:
        width: Number of columns
        height: Number of rows
        seed: Seed for the letter and anchor draws (None: current time)
        hidden_words: Words as strings or WordSpec entries
        anchor_mode: "fit" or "legacy" anchor ranges
        collision_policy: "retry" or "overwrite"
        max_attempts: Anchor draws allowed per word under "retry"

    Returns:
        The finished Grid, with its placements and the seed used

    Raises:
        ConfigurationError: If any word cannot be placed
    """
    specs = [as_word_spec(word) for word in hidden_words]
    check_fit(specs, width, height, anchor_mode)

    seed = resolve_seed(seed)
    rng = random.Random(seed)

    cells = [[rng.choice(ALPHABET) for _ in range(width)] for _ in range(height)]

    reserved: Set[Cell] = set()
    for index, spec in enumerate(specs):
        if spec.anchor is not None:
            fixed = HiddenWord(text=spec.text, orientation=orientation_for_index(index), anchor=spec.anchor)
            reserved.update(fixed.cells)

    claimed: Set[Cell] = set()
    placements: List[HiddenWord] = []
    for index, spec in enumerate(specs):
        orientation = orientation_for_index(index)
        placed = _place(
            rng, spec, orientation, width, height,
            claimed, reserved, anchor_mode, collision_policy, max_attempts,
        )
        for (row, col), letter in zip(placed.cells, placed.text):
            cells[row][col] = letter
        claimed.update(placed.cells)
        placements.append(placed)
        _log.debug("placed '%s' at %s (%s)", placed.text, placed.anchor, placed.orientation)

    return Grid(
        rows=tuple("".join(row) for row in cells),
        seed=seed,
        placements=tuple(placements),
    )
