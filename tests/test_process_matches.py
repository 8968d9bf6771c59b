from veggie_match.board.board import Board
from veggie_match.board.specials import determine_special, score_event_for
from veggie_match.components.cell import CellRecord, SpecialKind, VeggieKind
from veggie_match.components.match import Match, MatchDirection


def test_four_in_a_row_creates_horizontal_stripe_at_swap_position(filler):
    layout = filler(6, 6)
    for col in range(4):
        layout[3][col] = "tomato"
    board = Board.from_layout(layout)
    matches = board.find_matches()
    result = board.process_matches(matches, (3, 1))

    assert result.specials == [CellRecord(3, 1, VeggieKind.TOMATO, SpecialKind.STRIPE_H)]
    assert len(result.removed) == 3, "Special host cell must not be removed"
    assert {r.position for r in result.removed} == {(3, 0), (3, 2), (3, 3)}
    assert result.score_events == ["match_4"]
    host = board.get_cell(3, 1)
    assert host.special is SpecialKind.STRIPE_H and host.type is VeggieKind.TOMATO
    for col in (0, 2, 3):
        assert board.get_cell(3, col) is None


def test_vertical_four_without_swap_uses_middle_cell(filler):
    layout = filler(6, 6)
    for row in range(1, 5):
        layout[row][0] = "carrot"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches())
    assert result.specials == [CellRecord(3, 0, VeggieKind.CARROT, SpecialKind.STRIPE_V)]
    assert board.get_cell(3, 0).special is SpecialKind.STRIPE_V


def test_swap_position_outside_match_falls_back_to_middle(filler):
    layout = filler(6, 6)
    for col in range(4):
        layout[0][col] = "carrot"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches(), (5, 5))
    assert result.specials[0].position == (0, 2)


def test_five_in_a_row_creates_rainbow(filler):
    layout = filler(6, 6)
    for col in range(5):
        layout[1][col] = "eggplant"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches(), (1, 4))
    assert result.specials == [CellRecord(1, 4, VeggieKind.RAINBOW, SpecialKind.RAINBOW)]
    assert result.score_events == ["match_5"]
    assert len(result.removed) == 4
    assert board.get_cell(1, 4).type is VeggieKind.RAINBOW


def test_l_shape_scores_shape_bonus_and_creates_rainbow(filler):
    layout = filler(6, 6)
    for pos in [(2, 2), (2, 3), (2, 4), (0, 2), (1, 2)]:
        layout[pos[0]][pos[1]] = "eggplant"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches(), (0, 2))
    assert result.score_events == ["match_L_T"]
    assert result.specials[0].special is SpecialKind.RAINBOW
    assert result.specials[0].position == (0, 2)
    assert len(result.removed) == 4


def test_three_in_a_row_creates_nothing(filler):
    layout = filler(6, 6)
    layout[5][3] = layout[5][4] = layout[5][5] = "tomato"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches(), (5, 4))
    assert result.specials == []
    assert result.score_events == ["match_3"]
    assert [r.position for r in result.removed] == [(5, 3), (5, 4), (5, 5)]
    assert all(r.type is VeggieKind.TOMATO for r in result.removed)


def test_overlapping_matches_remove_shared_cell_once(filler):
    layout = filler(6, 6)
    cells = [(2, c) for c in range(5)] + [(0, 0), (1, 0), (3, 4), (4, 4)]
    for row, col in cells:
        layout[row][col] = "tomato"
    board = Board.from_layout(layout)
    matches = board.find_matches()
    assert len(matches) == 2, "Second vertical run stays separate from the merged shape"
    result = board.process_matches(matches)
    positions = [r.position for r in result.removed]
    assert len(positions) == len(set(positions))
    assert len(result.specials) == 1
    assert set(positions) | {result.specials[0].position} == set(cells)
    assert result.score_events == ["match_L_T", "match_3"]


def test_removed_records_keep_special_kind(filler):
    layout = filler(6, 6)
    layout[4][0] = "tomato"
    layout[4][1] = {"type": "tomato", "special": "stripe_v"}
    layout[4][2] = "tomato"
    board = Board.from_layout(layout)
    result = board.process_matches(board.find_matches())
    stripe = next(r for r in result.removed if r.position == (4, 1))
    assert stripe.special is SpecialKind.STRIPE_V


def test_policy_small_shape_and_score_priority():
    shape = Match(cells=[(0, 0), (0, 1), (1, 0), (2, 0)], type=VeggieKind.CORN, direction=MatchDirection.L_SHAPE)
    assert determine_special(shape, (0, 0)) is None
    assert score_event_for(shape).value == "match_L_T"
    run = Match(cells=[(0, 0), (0, 1), (0, 2)], type=VeggieKind.CORN, direction=MatchDirection.HORIZONTAL)
    assert determine_special(run) is None
    assert score_event_for(run).value == "match_3"
