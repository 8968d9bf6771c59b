"""Headless entry point for the Veggie Match board engine.

Plays a level by always taking the hinted move, logging every event that
crosses the bus. Rendering and input live in whatever front end embeds the
engine; this runner exists to exercise the full turn flow from a terminal.

Run with: ``python src/main.py --level 2 --seed 7``
"""
import argparse
import logging
import random

from veggie_match.components.game_state import GameMode
from veggie_match.events.bus import (
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_FAILED,
    EVENT_SPECIAL_CREATED,
    EVENT_STAR_EARNED,
    EventBus,
)
from veggie_match.systems.game_flow_system import GameFlowSystem
from veggie_match.systems.play_system import PlaySystem
from veggie_match.world import create_world

logger = logging.getLogger("veggie_match")


def _log_event(name):
    def handler(sender, **payload):
        logger.info("%s %s", name, {k: v for k, v in payload.items() if k != "step"})
    return handler


def play(level_number: int, seed: int | None = None, max_turns: int = 200) -> GameMode:
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    flow = GameFlowSystem(world, bus)
    play_system = PlaySystem(world, bus)
    for name in (EVENT_SPECIAL_CREATED, EVENT_CASCADE_COMPLETE, EVENT_BOARD_SHUFFLED,
                 EVENT_STAR_EARNED, EVENT_LEVEL_COMPLETE, EVENT_LEVEL_FAILED):
        bus.subscribe(name, _log_event(name))

    session = flow.start_level(level_number)
    for _ in range(max_turns):
        if flow.mode != GameMode.PLAYING:
            break
        move = session.board.find_valid_move()
        if move is None:
            break
        outcome = play_system.attempt_swap(move.r1, move.c1, move.r2, move.c2)
        logger.info(
            "swap %s -> %s: +%d (score %d, moves left %d)",
            move.src, move.dst, outcome.points, session.score, session.moves_left,
        )
    return flow.mode


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Autoplay a Veggie Match level using hints.")
    parser.add_argument("--level", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    mode = play(args.level, args.seed)
    logger.info("finished in mode %s", mode.name)
    return 0 if mode == GameMode.LEVEL_COMPLETE else 1


if __name__ == "__main__":
    raise SystemExit(main())
