"""
Main entry point for building and replaying word search sessions.

Usage:
    python -m src.main
    python -m src.main config.yaml --events drag.yaml --output results/run1.json --verbose
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError

from .board import ConfigurationError, render_grid
from .session import GameConfig, WordSearchSession, load_events


def load_config(config_path: str) -> GameConfig:
    """Load session configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping of options: {config_path}")

    return GameConfig(**data)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build a word search grid and replay pointer events over it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  cell_size: 40
  grid_width: 16
  grid_height: 12
  random_seed: 42
  hidden_words: [code, int, mobile, java, programs]
  completion_policy: strict

Example events.yaml:
  events:
    - {kind: down, x: 5, y: 5}
    - {kind: move, x: 45, y: 5}
    - {kind: up}
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument(
        "--events", "-e",
        help="Path to a YAML or JSON pointer event script to replay"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Override the configured random seed"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write a results file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
        if args.seed is not None:
            config.random_seed = args.seed
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    try:
        events = load_events(args.events) if args.events else []
    except (OSError, ValidationError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading events: {e}", file=sys.stderr)
        return 1

    try:
        session = WordSearchSession.create(config=config)
    except ConfigurationError as e:
        print(f"Configuration error [{e.code}]: {e.message}", file=sys.stderr)
        return 1

    if args.verbose:
        if args.config:
            print(f"Config: {args.config}")
        if args.events:
            print(f"Events: {args.events} ({len(events)} events)")
        print()

    result = session.run(events, verbose=args.verbose)

    if not args.no_save:
        if args.output:
            output_path = Path(args.output)
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path("results") / f"session_{timestamp}.json"
        session.save_result(output_path)
        if args.verbose:
            print(f"Results saved to: {output_path}")

    # Print summary
    print()
    print(render_grid(session.grid, session.tracker.current_highlights(), session.found_cells()))
    print()
    print("=== Session Summary ===")
    print(f"Seed: {result.seed}")
    print(f"Events: {result.events_processed} ({result.events_dropped} dropped)")
    print(f"Found: {', '.join(f.word for f in result.found_words) or '(none)'}")
    print(f"Remaining: {', '.join(result.remaining_words) or '(none)'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
