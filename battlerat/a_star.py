import heapq
import typing

from battlerat.grid import Board, Cell, Direction, SnapshotError


class Path(typing.NamedTuple):
    cells: typing.List[Cell]
    cost: int

    def first_step(self) -> typing.Optional[Direction]:
        """Direction of the move after the start cell, None for a degenerate path."""
        if len(self.cells) < 2:
            return None
        return self.cells[0].direction_to(self.cells[1])


def nearest_food(head: Cell, food: typing.Sequence[Cell]) -> Cell:
    """Food cell closest to head by Manhattan distance; the earliest one wins ties."""
    if not food:
        raise SnapshotError("Cannot pick a food goal on a board without food")
    return min(food, key=head.distance)


def a_star(board: Board, start: Cell, goal: Cell) -> typing.Optional[Path]:
    """
    Shortest path from start to goal around every snake body.

    Each step costs 1, the heuristic is the Manhattan distance to goal. The start cell
    itself may be occupied (it is normally our own head). Returns None when the goal
    cannot be reached.
    """
    # Priority queue: (f_score, g_score, cell)
    open_set = [(start.distance(goal), 0, start)]
    g_scores = {start: 0}
    came_from = {}
    closed_set = set()

    while open_set:
        _, g_score, current = heapq.heappop(open_set)

        if current == goal:
            cells = [current]
            while current in came_from:
                current = came_from[current]
                cells.append(current)
            cells.reverse()
            return Path(cells=cells, cost=g_score)

        if current in closed_set:
            continue
        closed_set.add(current)

        for direction in Direction:
            neighbor = board.neighbor(current, direction)
            if not board.in_bounds(neighbor) or board.is_occupied(neighbor):
                continue

            tentative_g = g_score + 1
            if neighbor in g_scores and tentative_g >= g_scores[neighbor]:
                continue

            g_scores[neighbor] = tentative_g
            came_from[neighbor] = current
            heapq.heappush(open_set, (tentative_g + neighbor.distance(goal), tentative_g, neighbor))

    return None
