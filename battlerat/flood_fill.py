from enum import Enum

from battlerat.grid import Board, Cell
from battlerat.safety import safe_moves


class FieldType(Enum):
    FREE = 0
    BLOCKED = 1
    DISCOVERED = 2


def build_field(board: Board):
    """Working grid indexed [y][x]: every snake body cell blocked, the rest free."""
    field = [[FieldType.FREE] * board.width for _ in range(board.height)]
    for cell in board.occupied:
        if board.in_bounds(cell):
            field[cell.y][cell.x] = FieldType.BLOCKED
    return field


def flood_fill(board: Board, start: Cell) -> int:
    """
    Count the cells reachable from start by repeatedly taking safe moves.

    Safety is recomputed at every visited cell against the board as it is now; other
    snakes are not moved during the fill. Uses an explicit stack so large boards do not
    hit the recursion limit.
    """
    field = build_field(board)
    stack = [start]
    area_size = 0

    while stack:
        cell = stack.pop()
        # Off-board cells are treated as blocked.
        if not board.in_bounds(cell) or field[cell.y][cell.x] != FieldType.FREE:
            continue
        field[cell.y][cell.x] = FieldType.DISCOVERED
        area_size += 1

        is_move_safe = safe_moves(cell, board)
        for direction in is_move_safe.safe_directions():
            stack.append(board.neighbor(cell, direction))

    return area_size
