import random

from esper import World

from veggie_match.components.game_state import GameMode, GameState
from veggie_match.components.level_progress import LevelProgress
from veggie_match.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    level_number: int = 1,
    progress: LevelProgress | None = None,
    rng: random.Random | None = None,
) -> World:
    """Create the world with its singleton state entity.

    ``world.random`` is the one random source every board in this world draws
    from; pass a seeded ``random.Random`` for reproducible games.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(
        GameState(mode=initial_mode, level_number=level_number),
        progress if progress is not None else LevelProgress(),
    )
    return world
