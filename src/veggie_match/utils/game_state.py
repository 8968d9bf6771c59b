from __future__ import annotations

from esper import World

from veggie_match.components.game_state import GameMode, GameState
from veggie_match.components.level_progress import LevelProgress
from veggie_match.components.play_session import PlaySession
from veggie_match.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    """Return the GameState singleton, creating it if absent."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def get_level_progress(world: World) -> LevelProgress:
    for _, progress in world.get_component(LevelProgress):
        return progress
    progress = LevelProgress()
    world.create_entity(progress)
    return progress


def get_session(world: World) -> PlaySession | None:
    for _, session in world.get_component(PlaySession):
        return session
    return None


def replace_session(world: World, session: PlaySession | None) -> None:
    """Drop any existing PlaySession entity and register ``session`` in its place."""
    for entity, _ in list(world.get_component(PlaySession)):
        world.delete_entity(entity, immediate=True)
    if session is not None:
        world.create_entity(session)


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs."""
    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
