import os
import random
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game_logic import GameState, SnakeConfig, SnakeGame
from input_buffer import Direction
from scoring import HighScoreStore, ScoreBoard
from utils import HIGH_SCORE_ENV


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(str(tmp_path / "high_score.txt"))


def test_missing_file_loads_zero(store):
    assert store.load() == 0


@pytest.mark.parametrize("raw", ["", "abc", "12.5", "-40", "   ", "+5", "1_000", "\u0663"])
def test_malformed_value_loads_zero(store, raw):
    with open(store.path, "w", encoding="utf-8") as fh:
        fh.write(raw)
    assert store.load() == 0


def test_save_and_load(store):
    assert store.save(150)
    assert store.load() == 150
    with open(store.path, encoding="utf-8") as fh:
        assert fh.read() == "150"


def test_save_creates_parent_directories(tmp_path):
    store = HighScoreStore(str(tmp_path / "nested" / "dir" / "best.txt"))
    assert store.save(7)
    assert store.load() == 7


def test_save_failure_is_reported_not_raised(tmp_path):
    store = HighScoreStore(str(tmp_path))
    assert not store.save(5)


def test_path_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "env_best.txt"
    monkeypatch.setenv(HIGH_SCORE_ENV, str(target))
    assert HighScoreStore().path == str(target)


def test_higher_score_replaces_stored(store):
    store.save(100)
    board = ScoreBoard(store)
    assert board.high_score == 100

    assert board.record(150)
    assert board.high_score == 150
    assert store.load() == 150


def test_lower_or_equal_score_keeps_stored(store):
    store.save(100)
    board = ScoreBoard(store)

    assert not board.record(80)
    assert not board.record(100)
    assert board.high_score == 100
    assert store.load() == 100


def test_fractional_scores_are_floored():
    store = MagicMock()
    store.load.return_value = 10
    board = ScoreBoard(store)

    assert not board.record(10.9)
    assert board.record(11.2)
    store.save.assert_called_once_with(11)
    assert board.last_was_record


@pytest.mark.parametrize("raw", [b"\x80\x81", b"\xff\xfe\x00garbage"])
def test_undecodable_file_loads_zero(store, raw):
    with open(store.path, "wb") as fh:
        fh.write(raw)
    assert store.load() == 0
    assert ScoreBoard(store).high_score == 0


def test_surrounding_whitespace_is_accepted(store):
    with open(store.path, "w", encoding="utf-8") as fh:
        fh.write(" 42\n")
    assert store.load() == 42


def serpentine(size):
    cells = []
    for y in range(size):
        xs = range(size) if y % 2 == 0 else range(size - 1, -1, -1)
        cells.extend((x, y) for x in xs)
    return cells


def crash_after_one_meal(store, board):
    cfg = SnakeConfig(
        high_score_path=store.path,
        initial_snake=((1, 10), (2, 10), (3, 10)),
        initial_direction=Direction.LEFT,
    )
    game = SnakeGame(cfg, rng=random.Random(3), on_game_over=board.finish)
    game.start()
    game.food = (0, 10)
    game.step()
    game.step()
    assert game.state is GameState.GAME_OVER
    return game


def test_finish_celebrates_new_record(store):
    store.save(10)
    board = ScoreBoard(store)
    game = crash_after_one_meal(store, board)

    events = game.drain_events()
    assert [e.kind for e in events] == ["food", "explosion", "success"]
    assert events[-1].cell == (10.0, 10.0)
    assert board.last_was_record
    assert store.load() == 16


def test_finish_without_record_emits_no_success(store):
    store.save(100)
    board = ScoreBoard(store)
    game = crash_after_one_meal(store, board)

    assert [e.kind for e in game.drain_events()] == ["food", "explosion"]
    assert not board.last_was_record
    assert store.load() == 100


def test_board_full_record_emits_single_success(store):
    board = ScoreBoard(store)
    path = serpentine(10)
    cfg = SnakeConfig(
        high_score_path=store.path,
        tile_count=10,
        initial_snake=tuple(reversed(path[:-1])),
        initial_direction=Direction.LEFT,
    )
    game = SnakeGame(cfg, rng=random.Random(3), on_game_over=board.finish)
    game.start()
    game.step()

    assert board.last_was_record
    assert [e.kind for e in game.drain_events()] == ["food", "success"]
