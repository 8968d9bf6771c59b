import pytest

from veggie_match.board.board import Board
from veggie_match.components.cell import Cell, SpecialKind, VeggieKind


def test_get_cell_out_of_bounds_returns_none(filler):
    board = Board.from_layout(filler(4, 5))
    assert board.get_cell(-1, 0) is None
    assert board.get_cell(0, 5) is None
    assert board.get_cell(4, 0) is None
    assert board.get_cell(3, 4) == Cell(VeggieKind("corn"))


def test_is_adjacent_requires_manhattan_distance_one():
    assert Board.is_adjacent(2, 2, 2, 3)
    assert Board.is_adjacent(2, 2, 1, 2)
    assert not Board.is_adjacent(2, 2, 3, 3)
    assert not Board.is_adjacent(2, 2, 2, 2)
    assert not Board.is_adjacent(0, 0, 0, 2)


def test_swap_exchanges_cells_and_ignores_out_of_bounds(filler):
    board = Board.from_layout(filler(3, 3))
    a, b = board.get_cell(0, 0), board.get_cell(0, 1)
    board.swap(0, 0, 0, 1)
    assert board.get_cell(0, 0) == b and board.get_cell(0, 1) == a
    before = board.get_snapshot()
    board.swap(0, 0, 0, -1)
    assert board.get_snapshot() == before


def test_snapshot_is_a_detached_copy(filler):
    board = Board.from_layout(filler(3, 3))
    snap = board.get_snapshot()
    assert snap[0][0] == {"type": "broccoli", "special": "none"}
    snap[0][0]["type"] = "tomato"
    snap[1][1] = None
    assert board.get_cell(0, 0).type is VeggieKind.BROCCOLI
    assert board.get_cell(1, 1) is not None


def test_rainbow_cell_always_carries_rainbow_type():
    cell = Cell(type=VeggieKind.TOMATO, special=SpecialKind.RAINBOW)
    assert cell.type is VeggieKind.RAINBOW
    assert Cell.rainbow() == cell


def test_check_special_swap_reports_rainbow_and_target(filler):
    layout = filler(3, 3)
    layout[1][1] = {"type": "rainbow", "special": "rainbow"}
    board = Board.from_layout(layout)
    info = board.check_special_swap(1, 1, 1, 2)
    assert info.is_special_swap
    assert info.rainbow_pos == (1, 1)
    assert info.target_type == board.get_cell(1, 2).type
    reverse = board.check_special_swap(0, 1, 1, 1)
    assert reverse.is_special_swap and reverse.rainbow_pos == (1, 1)
    assert reverse.target_type == board.get_cell(0, 1).type
    assert not board.check_special_swap(0, 0, 0, 1).is_special_swap


def test_board_requires_concrete_veggie_types():
    with pytest.raises(ValueError):
        Board(3, 3, [])
    with pytest.raises(ValueError):
        Board(3, 3, ["tomato", "rainbow"])


def test_set_cell_accepts_names_and_dicts(filler):
    board = Board.from_layout(filler(3, 3))
    board.set_cell(0, 0, "tomato")
    board.set_cell(0, 1, {"type": "carrot", "special": "stripe_v"})
    board.set_cell(0, 2, None)
    assert board.get_cell(0, 0) == Cell(VeggieKind.TOMATO)
    assert board.get_cell(0, 1) == Cell(VeggieKind.CARROT, SpecialKind.STRIPE_V)
    assert board.get_cell(0, 2) is None
    assert board.has_empty()
