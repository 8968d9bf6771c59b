import logging
import random

from veggie_match.board.board import Board
from veggie_match.factories.levels import all_levels


def test_initial_board_has_no_matches_and_a_valid_move():
    for level in all_levels():
        for seed in range(10):
            board = Board(level.grid_rows, level.grid_cols, level.veggie_types, rng=random.Random(seed))
            assert not board.find_matches(), f'Level {level.level_number} seed {seed} starts with a match'
            assert board.find_valid_move() is not None, f'Level {level.level_number} seed {seed} is dead'
            assert not board.has_empty()


def test_initial_board_uses_only_allowed_types():
    board = Board(8, 8, ["tomato", "carrot", "corn"], rng=random.Random(3))
    types = {cell["type"] for row in board.get_snapshot() for cell in row}
    assert types <= {"tomato", "carrot", "corn"}


def test_same_seed_gives_same_board():
    a = Board(7, 7, ["tomato", "carrot", "corn", "chili"], rng=random.Random(99))
    b = Board(7, 7, ["tomato", "carrot", "corn", "chili"], rng=random.Random(99))
    assert a.get_snapshot() == b.get_snapshot()


def test_fill_falls_back_to_first_type_when_every_draw_completes_a_run(caplog):
    with caplog.at_level(logging.DEBUG, logger="veggie_match.board.board"):
        board = Board(4, 4, ["tomato"], rng=random.Random(0))
    assert not board.has_empty()
    assert {cell["type"] for row in board.get_snapshot() for cell in row} == {"tomato"}
    assert board.find_matches(), 'A single-type board cannot avoid runs'
    assert any(r.getMessage().startswith("Fill fallback at") for r in caplog.records)


def test_injected_random_source_is_used():
    class CountingRandom:
        def __init__(self):
            self.calls = 0
            self._inner = random.Random(8)

        def choice(self, seq):
            self.calls += 1
            return self._inner.choice(seq)

        def shuffle(self, seq):
            self.calls += 1
            self._inner.shuffle(seq)

    rng = CountingRandom()
    board = Board(6, 6, ["tomato", "carrot", "eggplant", "broccoli"], rng=rng)
    assert board.rng is rng
    assert rng.calls >= 36, 'Every initial cell is drawn from the injected source'
