import random

import pytest

from veggie_match.components.cell import VeggieKind
from veggie_match.components.game_state import GameMode
from veggie_match.events.bus import EVENT_GAME_MODE_CHANGED, EVENT_LEVEL_STARTED, EventBus
from veggie_match.factories.levels import get_level, level_count
from veggie_match.systems.game_flow_system import GameFlowSystem
from veggie_match.utils.game_state import get_game_state, get_level_progress, get_session, set_game_mode
from veggie_match.world import create_world


def _flow():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(42))
    return bus, world, GameFlowSystem(world, bus)


def test_world_starts_in_menu_without_session():
    bus, world, flow = _flow()
    assert flow.mode == GameMode.MENU
    assert get_session(world) is None
    assert get_level_progress(world).to_dict() == {}


def test_menu_to_intro_to_play():
    bus, world, flow = _flow()
    changes = []
    started = []
    bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda s, **k: changes.append(k['new_mode']))
    bus.subscribe(EVENT_LEVEL_STARTED, lambda s, **k: started.append(k))

    flow.open_level_select()
    assert not flow.open_level_intro(2), 'Level 2 is locked until level 1 earns a star'
    assert flow.open_level_intro(1)
    session = flow.start_level()

    assert changes == [GameMode.LEVEL_SELECT, GameMode.LEVEL_INTRO, GameMode.PLAYING]
    assert started == [{'level_number': 1, 'rows': 6, 'cols': 6}]
    assert get_session(world) is session
    assert session.moves_left == 25
    assert session.eliminated == {VeggieKind.TOMATO: 0, VeggieKind.CARROT: 0}
    assert session.board.rows == 6 and session.board.cols == 6
    assert not session.board.find_matches()


def test_unknown_level_is_rejected():
    bus, world, flow = _flow()
    assert not flow.open_level_intro(level_count() + 1)
    with pytest.raises(ValueError):
        flow.start_level(level_count() + 1)


def test_pause_resume_and_retry():
    bus, world, flow = _flow()
    first = flow.start_level(1)
    assert not flow.resume(), 'Nothing to resume while playing'
    assert flow.pause()
    assert flow.mode == GameMode.PAUSED
    assert not flow.pause()
    assert flow.resume()
    assert flow.mode == GameMode.PLAYING

    first.score = 400
    second = flow.retry()
    assert second is not first
    assert second.score == 0
    assert len(list(world.get_component(type(second)))) == 1, 'Retry replaces the old session'


def test_next_level_after_completion():
    bus, world, flow = _flow()
    flow.start_level(1)
    assert not flow.next_level()
    get_level_progress(world).record(1, 2)
    set_game_mode(world, bus, GameMode.LEVEL_COMPLETE)
    assert flow.next_level()
    assert flow.mode == GameMode.LEVEL_INTRO
    assert get_game_state(world).level_number == 2
    session = flow.start_level()
    assert session.level == get_level(2)
    assert session.board.rows == 7


def test_back_to_menu_drops_session():
    bus, world, flow = _flow()
    flow.start_level(1)
    flow.back_to_menu()
    assert flow.mode == GameMode.MENU
    assert get_session(world) is None
