import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from input_buffer import ARROW_KEYS, LETTER_KEYS, Direction, DirectionBuffer, direction_for_key


@pytest.mark.parametrize(
    "key, expected",
    [
        ("Up", Direction.UP),
        ("ArrowDown", Direction.DOWN),
        ("left", Direction.LEFT),
        ("RIGHT", Direction.RIGHT),
        ("w", Direction.UP),
        ("S", Direction.DOWN),
        ("a", Direction.LEFT),
        ("d", Direction.RIGHT),
    ],
)
def test_direction_for_key(key, expected):
    assert direction_for_key(key) is expected


@pytest.mark.parametrize("key", ["q", "space", "Return", "", "1"])
def test_unknown_keys_map_to_nothing(key):
    assert direction_for_key(key) is None


def test_key_tables_cover_all_directions():
    assert set(LETTER_KEYS.values()) == set(Direction)
    assert set(ARROW_KEYS.values()) == set(Direction)


def test_opposites():
    assert Direction.LEFT.is_opposite(Direction.RIGHT)
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert not Direction.UP.is_opposite(Direction.LEFT)
    assert not Direction.UP.is_opposite(Direction.UP)


def test_unknown_key_has_no_side_effect():
    buf = DirectionBuffer(Direction.UP)
    assert not buf.press("x")
    assert buf.pending is Direction.UP
    assert buf.applied is Direction.UP


def test_resolve_applies_latest_request():
    buf = DirectionBuffer(Direction.RIGHT)
    buf.request(Direction.UP)
    buf.request(Direction.DOWN)
    assert buf.resolve() is Direction.DOWN
    assert buf.applied is Direction.DOWN


def test_resolve_discards_reversal():
    buf = DirectionBuffer(Direction.RIGHT)
    assert buf.press("ArrowLeft")
    assert buf.resolve() is Direction.RIGHT
    assert buf.pending is Direction.RIGHT
    # Discarded request does not come back on the next step.
    assert buf.resolve() is Direction.RIGHT


def test_reset():
    buf = DirectionBuffer(Direction.RIGHT)
    buf.request(Direction.UP)
    buf.reset(Direction.LEFT)
    assert buf.applied is Direction.LEFT
    assert buf.pending is Direction.LEFT
