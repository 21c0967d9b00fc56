import typing
from dataclasses import dataclass, replace

from battlerat.grid import Board, Cell, Direction


@dataclass(frozen=True)
class SafetyMap:
    """Which of the four moves are still considered safe. Narrowing returns a new map."""

    up: bool = True
    down: bool = True
    left: bool = True
    right: bool = True

    def is_safe(self, direction: Direction) -> bool:
        return getattr(self, direction.value)

    def narrow(self, direction: Direction) -> "SafetyMap":
        return replace(self, **{direction.value: False})

    def safe_directions(self) -> typing.List[Direction]:
        return [direction for direction in Direction if self.is_safe(direction)]

    def any_safe(self) -> bool:
        return self.up or self.down or self.left or self.right


def prevent_out_of_bounds(source: Cell, board: Board, is_move_safe: SafetyMap) -> SafetyMap:
    for direction in Direction:
        if not board.in_bounds(board.neighbor(source, direction)):
            is_move_safe = is_move_safe.narrow(direction)
    return is_move_safe


def prevent_body_collision(source: Cell, board: Board, is_move_safe: SafetyMap) -> SafetyMap:
    # The source cell is never an obstacle for moves leaving it.
    for direction in is_move_safe.safe_directions():
        next_cell = board.neighbor(source, direction)
        if next_cell != source and board.is_occupied(next_cell):
            is_move_safe = is_move_safe.narrow(direction)
    return is_move_safe


def prevent_head_to_head(source: Cell, board: Board, is_move_safe: SafetyMap) -> SafetyMap:
    """
    Rule out cells another head could also move into this turn.

    If that would leave no move at all, the head-to-head risk is accepted and the map
    is returned unchanged.
    """
    contested = set()
    for head in board.heads:
        if head == source:
            continue
        contested.update(head.neighbors())

    narrowed = is_move_safe
    for direction in is_move_safe.safe_directions():
        if board.neighbor(source, direction) in contested:
            narrowed = narrowed.narrow(direction)

    if not narrowed.any_safe():
        return is_move_safe
    return narrowed


def safe_moves(source: Cell, board: Board) -> SafetyMap:
    """Run the bounds, body and head-to-head checks, in that order, for moves from source."""
    is_move_safe = SafetyMap()
    is_move_safe = prevent_out_of_bounds(source, board, is_move_safe)
    is_move_safe = prevent_body_collision(source, board, is_move_safe)
    is_move_safe = prevent_head_to_head(source, board, is_move_safe)
    return is_move_safe
