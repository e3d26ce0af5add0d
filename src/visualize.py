"""
Standalone CLI for rendering a saved session result as a text grid.

Usage:
    python -m src.visualize results/session.json
    python -m src.visualize results/session.json --output grid.txt
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .board import Grid, render_grid
from .session import SessionResult


def render_result(results_path: str | Path) -> str:
    """
    Render a saved SessionResult.

    Letters of found words are upper-cased; hidden words and which of them
    were found are listed under the grid.
    """
    with open(results_path) as f:
        result = SessionResult(**json.load(f))

    grid = Grid.from_rows(result.grid, placements=result.placements, seed=result.seed)
    found_cells = [tuple(cell) for found in result.found_words for cell in found.cells]
    found = {f.word for f in result.found_words}

    lines = [render_grid(grid, found=found_cells), ""]
    for placement in grid.placements:
        mark = "x" if placement.text in found else " "
        lines.append(f"[{mark}] {placement.text} {placement.orientation} @ {placement.anchor}")

    return "\n".join(lines)


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(
        description="Render a word search session result as text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.visualize results/session.json
  python -m src.visualize results/session.json --output grid.txt
        """
    )
    parser.add_argument(
        "results",
        help="Path to the results JSON file"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write the rendering to this file instead of stdout"
    )

    args = parser.parse_args(argv)

    # Validate input file
    results_path = Path(args.results)
    if not results_path.exists():
        print(f"Error: Results file not found: {args.results}", file=sys.stderr)
        return 1

    if not results_path.suffix == ".json":
        print("Warning: Input file doesn't have .json extension", file=sys.stderr)

    try:
        text = render_result(results_path)
    except Exception as e:
        print(f"Error rendering result: {e}", file=sys.stderr)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n")
        print(f"Rendering written to: {output_path}")
    else:
        print(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
