"""Grid reading and rendering utilities."""

from typing import Iterable, List, Set

from .models import Cell, Grid, HiddenWord


def read_word(grid: Grid, hidden_word: HiddenWord) -> str:
    """Read the letters currently under a placed word's cells."""
    return "".join(grid.letter(row, col) for row, col in hidden_word.cells)


def intact_words(grid: Grid) -> List[str]:
    """Placed words that can still be read in full (not crossed by a later word)."""
    return [p.text for p in grid.placements if read_word(grid, p) == p.text]


def render_grid(
    grid: Grid,
    highlights: Iterable[Cell] = (),
    found: Iterable[Cell] = (),
) -> str:
    """
    Render the grid to a string.

    Letters of found words are upper-cased and highlighted cells are
    wrapped in brackets; every other cell is padded to the same width.
    """
    highlighted: Set[Cell] = set(highlights)
    found_cells: Set[Cell] = set(found)

    lines = []
    for row in range(grid.height):
        line = ""
        for col in range(grid.width):
            letter = grid.letter(row, col)
            if (row, col) in found_cells:
                letter = letter.upper()
            line += f"[{letter}]" if (row, col) in highlighted else f" {letter} "
        lines.append(line.rstrip())

    return "\n".join(lines)
