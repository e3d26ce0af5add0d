"""Test session configuration, pointer translation and replay."""

import json

import pytest
from pydantic import ValidationError

from src.board import ConfigurationError, Grid, read_word
from src.selection import OutOfBoundsInput
from src.session import (
    DEFAULT_HIDDEN_WORDS,
    GameConfig,
    PointerDown,
    PointerMove,
    PointerUp,
    SessionResult,
    WordSearchSession,
    load_events,
    parse_events,
    to_cell,
)
from src.visualize import render_result


def small_config(**overrides):
    """8x6 grid of 10px cells with 'code' across row 0 and 'int' down column 5."""
    data = {
        "cell_size": 10,
        "grid_width": 8,
        "grid_height": 6,
        "random_seed": 3,
        "hidden_words": [
            {"text": "code", "anchor": [0, 0]},
            {"text": "int", "anchor": [1, 5]},
        ],
    }
    data.update(overrides)
    return GameConfig(**data)


def drag(*points):
    """Press on the first point, move through the rest, release."""
    first, *rest = points
    events = [PointerDown(x=first[0], y=first[1])]
    events += [PointerMove(x=x, y=y) for x, y in rest]
    events.append(PointerUp())
    return events


class TestGameConfig:
    """Configuration loading and defaults."""

    def test_defaults_match_640x480_window(self):
        """640x480 window of 40px cells gives a 16x12 grid."""
        config = GameConfig()
        assert config.grid_width == 16
        assert config.grid_height == 12
        assert [w.text for w in config.hidden_words] == DEFAULT_HIDDEN_WORDS

    def test_plain_string_words(self):
        config = GameConfig(hidden_words=["Alpha", "beta"])
        assert [w.text for w in config.hidden_words] == ["alpha", "beta"]
        assert config.hidden_words[0].anchor is None

    def test_explicit_grid_size_wins(self):
        config = GameConfig(grid_width=5, grid_height=4)
        assert (config.grid_width, config.grid_height) == (5, 4)

    def test_invalid_policy(self):
        with pytest.raises(ValidationError):
            GameConfig(completion_policy="fuzzy")

    def test_invalid_cell_size(self):
        with pytest.raises(ValidationError):
            GameConfig(cell_size=0)


class TestPointerTranslation:
    """Pixel to cell conversion."""

    def test_to_cell(self):
        grid = Grid.from_rows(["abc", "def"])
        assert to_cell(0, 0, 40, grid) == (0, 0)
        assert to_cell(45, 5, 40, grid) == (0, 1)
        assert to_cell(119, 79, 40, grid) == (1, 2)

    @pytest.mark.parametrize("x,y", [(120, 0), (0, 80), (-1, 0), (0, -5)])
    def test_outside_grid(self, x, y):
        grid = Grid.from_rows(["abc", "def"])
        with pytest.raises(OutOfBoundsInput):
            to_cell(x, y, 40, grid)

    def test_parse_events(self):
        events = parse_events({"events": [
            {"kind": "down", "x": 1, "y": 2},
            {"kind": "move", "x": 3, "y": 4},
            {"kind": "up"},
        ]})
        assert events == [PointerDown(x=1, y=2), PointerMove(x=3, y=4), PointerUp()]

    def test_parse_events_bad_kind(self):
        with pytest.raises(ValidationError):
            parse_events([{"kind": "wheel", "x": 0, "y": 0}])

    def test_load_events_yaml(self, tmp_path):
        path = tmp_path / "events.yaml"
        path.write_text("events:\n  - {kind: down, x: 5, y: 5}\n  - {kind: up}\n")
        assert load_events(path) == [PointerDown(x=5, y=5), PointerUp()]

    def test_load_events_json(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"kind": "down", "x": 5, "y": 5}]))
        assert load_events(path) == [PointerDown(x=5, y=5)]

    def test_load_events_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_events(tmp_path / "nope.yaml")


class TestWordSearchSession:
    """Session creation and event handling."""

    def test_create_places_words(self):
        session = WordSearchSession.create(config=small_config())
        assert session.grid.rows[0].startswith("code")
        assert [read_word(session.grid, p) for p in session.grid.placements] == ["code", "int"]
        assert session.grid.seed == 3

    def test_create_with_kwargs(self):
        session = WordSearchSession.create(grid_width=6, grid_height=6, hidden_words=["ab"], random_seed=1)
        assert session.grid.width == 6

    def test_create_rejects_unplaceable_word(self):
        with pytest.raises(ConfigurationError) as exc:
            WordSearchSession.create(config=small_config(hidden_words=["abcdefghij"]))
        assert exc.value.code == "WORD_DOES_NOT_FIT"

    def test_drag_finds_across_word(self):
        session = WordSearchSession.create(config=small_config())
        result = session.run(drag((5, 5), (15, 5), (25, 5), (35, 5)))

        assert [f.word for f in result.found_words] == ["code"]
        assert result.found_words[0].cells == [(0, 0), (0, 1), (0, 2), (0, 3)]
        assert result.remaining_words == ["int"]
        assert result.events_processed == 5
        assert result.events_dropped == 0

    def test_drag_finds_down_word(self):
        session = WordSearchSession.create(config=small_config())
        session.run(drag((55, 15), (55, 25), (55, 35)))
        assert [f.word for f in session.found_words] == ["int"]
        assert session.found_cells() == [(1, 5), (2, 5), (3, 5)]

    def test_moves_within_a_cell(self):
        """Several pixel moves inside one cell count once."""
        session = WordSearchSession.create(config=small_config())
        session.run(drag((5, 5), (6, 6), (9, 1), (15, 5), (16, 5), (25, 5), (35, 5)))
        assert [f.word for f in session.found_words] == ["code"]

    def test_out_of_bounds_dropped(self):
        """Points outside the grid are dropped and leave the attempt alone."""
        session = WordSearchSession.create(config=small_config())
        session.handle(PointerDown(x=5, y=5))
        assert session.handle(PointerMove(x=500, y=5)) is False
        assert session.handle(PointerMove(x=-3, y=5)) is False
        assert session.events_dropped == 2
        assert session.tracker.progress == 1

        session.handle(PointerMove(x=15, y=5))
        assert session.tracker.progress == 2

    def test_out_of_bounds_press_dropped(self):
        session = WordSearchSession.create(config=small_config())
        assert session.handle(PointerDown(x=5, y=500)) is False
        assert session.tracker.state.phase == "idle"
        assert session.events_dropped == 1

    def test_release_drops_attempt(self):
        session = WordSearchSession.create(config=small_config())
        session.run(drag((5, 5), (15, 5)))
        assert session.tracker.current_highlights() == []
        assert session.found_words == []

    def test_on_event_callback(self):
        seen = []
        session = WordSearchSession.create(config=small_config())
        session.run(drag((5, 5), (15, 5), (25, 5), (35, 5)), on_event=lambda e, words: seen.append(words))
        assert len(seen) == 5
        assert [w.word for w in seen[3]] == ["code"]

    def test_get_state(self):
        session = WordSearchSession.create(config=small_config())
        session.handle(PointerDown(x=5, y=5))
        state = session.get_state()
        assert state["selection"]["progress"] == 1
        assert state["intact_words"] == ["code", "int"]
        assert state["remaining_words"] == ["code", "int"]
        assert session.highlight_mask()[0][0] is True

    def test_strict_policy_from_config(self):
        session = WordSearchSession.create(config=small_config(completion_policy="strict"))
        assert session.tracker.completion_policy == "strict"


class TestSessionResult:
    """Saved results."""

    def test_save_and_reload(self, tmp_path):
        session = WordSearchSession.create(config=small_config())
        session.run(drag((5, 5), (15, 5), (25, 5), (35, 5)))

        path = tmp_path / "out" / "session.json"
        session.save_result(path)

        with open(path) as f:
            data = json.load(f)
        result = SessionResult(**data)
        assert result.seed == 3
        assert result.grid == list(session.grid.rows)
        assert [f.word for f in result.found_words] == ["code"]
        assert result.placements == list(session.grid.placements)

    def test_render_result(self, tmp_path):
        session = WordSearchSession.create(config=small_config())
        session.run(drag((5, 5), (15, 5), (25, 5), (35, 5)))
        path = tmp_path / "session.json"
        session.save_result(path)

        text = render_result(path)
        assert text.splitlines()[0].startswith(" C  O  D  E")
        assert "[x] code H @ (0, 0)" in text
        assert "[ ] int V @ (1, 5)" in text
