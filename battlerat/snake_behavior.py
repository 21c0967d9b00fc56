import logging
import random
import time
import typing

from battlerat.a_star import Path, a_star, nearest_food
from battlerat.flood_fill import flood_fill
from battlerat.grid import Board, Direction, Snake
from battlerat.safety import SafetyMap, safe_moves

logger = logging.getLogger(__name__)

# Last resort when every move is fatal.
DEFAULT_MOVE = Direction.DOWN


class Decision(typing.NamedTuple):
    move: Direction
    elapsed: float  # seconds
    reason: str
    path: typing.Optional[Path] = None


class SnakeBehavior:
    """
    Per-turn move selection: safety filter, flood fill area per safe move, then path to
    food or a random safe move when the areas do not tell the moves apart.
    """

    @staticmethod
    def determine_move_options(
        board: Board, my_head, is_move_safe: SafetyMap
    ) -> typing.Dict[Direction, int]:
        """Reachable area behind every safe move."""
        return {
            move: flood_fill(board, board.neighbor(my_head, move))
            for move in is_move_safe.safe_directions()
        }

    @staticmethod
    def best_area_move(move_options: typing.Dict[Direction, int]) -> typing.Optional[Direction]:
        """
        The move with the largest area, or None when all areas are equal.

        Ties between several largest areas go to the first move in Direction order.
        """
        if not move_options:
            return None
        max_area = max(move_options.values())
        if all(area == max_area for area in move_options.values()):
            return None
        for move in Direction:
            if move_options.get(move) == max_area:
                return move
        return None

    @staticmethod
    def path_to_food(board: Board, me: Snake) -> typing.Optional[Path]:
        if not board.food:
            return None
        goal = nearest_food(me.head, board.food)
        return a_star(board, me.head, goal)

    @staticmethod
    def determine_next_move(board: Board, me: Snake, rng=random) -> Decision:
        started = time.perf_counter()

        def decided(move, reason, path=None):
            return Decision(move, time.perf_counter() - started, reason, path)

        is_move_safe = safe_moves(me.head, board)
        safe_directions = is_move_safe.safe_directions()
        if not safe_directions:
            logger.warning("No safe moves found, returning %s as default", DEFAULT_MOVE)
            return decided(DEFAULT_MOVE, "no-safe-move")

        move_options = SnakeBehavior.determine_move_options(board, me.head, is_move_safe)
        logger.debug("Area per move: %s", {str(m): a for m, a in move_options.items()})

        best_move = SnakeBehavior.best_area_move(move_options)
        if best_move is not None:
            return decided(best_move, "largest-area")

        path = SnakeBehavior.path_to_food(board, me)
        if path is not None:
            first_step = path.first_step()
            if first_step is not None:
                return decided(first_step, "path-to-food", path)

        return decided(rng.choice(safe_directions), "random")
