# Welcome to
# __________         __    __  .__                               __
# \______   \_____ _/  |__/  |_|  |   ____   ______ ____ _____  |  | __ ____
#  |    |  _/\__  \\   __\   __\  | _/ __ \ /  ___//    \\__  \ |  |/ // __ \
#  |    |   \ / __ \|  |  |  | |  |_\  ___/ \___ \|   |  \/ __ \|    <\  ___/
#  |________/(______/__|  |__| |____/\_____>______>___|__(______/__|__\\_____>
#
# STRATEGY: Battlerat
# - Drops moves into walls, bodies and contested head-to-head cells
# - Flood fills behind every remaining move and takes the roomiest one
# - When every move leaves the same room, follows an A* path to the nearest food
# - Otherwise picks a random safe move

import logging
import random
import typing

from battlerat.grid import Snapshot
from battlerat.snake_behavior import Decision, SnakeBehavior

logger = logging.getLogger(__name__)


def info() -> typing.Dict:
    """
    Returns information about the Battlesnake.
    """
    logger.info("INFO")
    return {
        "apiversion": "1",
        "author": "Maltereality",
        "color": "#879c6b",
        "head": "missile",
        "tail": "block-bum",
    }


def start(game_state: typing.Dict):
    logger.info("GAME START")


def end(game_state: typing.Dict):
    logger.info("GAME OVER")


def decide(snapshot: Snapshot, rng=random) -> Decision:
    """Pick this turn's move for the snake the snapshot belongs to."""
    decision = SnakeBehavior.determine_next_move(snapshot.board, snapshot.you, rng=rng)
    if logger.isEnabledFor(logging.DEBUG):
        path = decision.path.cells if decision.path else ()
        logger.debug("Turn %s board:\n%s", snapshot.turn, snapshot.board.render(path))
    return decision


def move(game_state: typing.Dict) -> typing.Dict:
    """
    Decides the next move for the snake
    """
    snapshot = Snapshot.from_game_state(game_state)
    decision = decide(snapshot)
    logger.info(
        "MOVE %s: %s (%s) took %.2fms",
        snapshot.turn,
        decision.move,
        decision.reason,
        decision.elapsed * 1000,
    )
    return {"move": decision.move.value}
