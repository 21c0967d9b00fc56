"""
Tests for the A* pathfinder and goal selection.
"""

import pytest

from battlerat.a_star import Path, a_star, nearest_food
from battlerat.grid import Cell, Direction, SnapshotError
from conftest import make_board, make_snake


def assert_valid_path(board, path, start, goal):
    assert path.cells[0] == start
    assert path.cells[-1] == goal
    assert path.cost == len(path.cells) - 1
    for cell in path.cells[1:]:
        assert board.in_bounds(cell)
        assert not board.is_occupied(cell)
    for current, following in zip(path.cells, path.cells[1:]):
        assert current.distance(following) == 1


class TestAStar:
    """Tests for shortest paths around snake bodies."""

    def test_corner_to_corner(self, corner_board):
        """From (0, 0) to (10, 10) on an open board: 21 cells, always closing in."""
        goal = Cell(10, 10)
        path = a_star(corner_board, Cell(0, 0), goal)

        assert path is not None
        assert len(path.cells) == 21
        assert path.cost == 20
        assert_valid_path(corner_board, path, Cell(0, 0), goal)
        distances = [cell.distance(goal) for cell in path.cells]
        assert distances == list(range(20, -1, -1))

    def test_detours_around_bodies(self):
        """A wall with a single gap forces the path through the gap."""
        me = make_snake("me", (0, 5), (0, 4))
        wall = make_snake("wall", *[(3, y) for y in range(10, 0, -1)])
        board = make_board(me, wall)

        path = a_star(board, me.head, Cell(6, 5))

        assert path is not None
        assert Cell(3, 0) in path.cells
        assert_valid_path(board, path, me.head, Cell(6, 5))
        assert path.cost > me.head.distance(Cell(6, 5))

    def test_unreachable_goal(self):
        """Food sealed off by a body yields no path."""
        me = make_snake("me", (5, 5), (5, 4))
        ring = make_snake("ring", (0, 1), (1, 1), (1, 0))
        board = make_board(me, ring)
        assert a_star(board, me.head, Cell(0, 0)) is None

    def test_goal_on_body_is_unreachable(self):
        me = make_snake("me", (5, 5), (5, 4), (5, 3))
        board = make_board(me)
        assert a_star(board, me.head, Cell(5, 3)) is None

    def test_start_is_goal_is_degenerate(self, empty_board):
        path = a_star(empty_board, Cell(5, 5), Cell(5, 5))
        assert path.cells == [Cell(5, 5)]
        assert path.first_step() is None


class TestPath:
    def test_first_step(self):
        path = Path(cells=[Cell(2, 2), Cell(2, 1), Cell(3, 1)], cost=2)
        assert path.first_step() is Direction.DOWN


class TestNearestFood:
    """Tests for picking the food goal."""

    def test_closest_wins(self):
        food = [Cell(10, 10), Cell(2, 3), Cell(0, 9)]
        assert nearest_food(Cell(0, 0), food) == Cell(2, 3)

    def test_ties_go_to_the_first(self):
        food = [Cell(5, 7), Cell(3, 5), Cell(7, 5)]
        assert nearest_food(Cell(5, 5), food) == Cell(5, 7)

    def test_no_food_raises(self):
        with pytest.raises(SnapshotError):
            nearest_food(Cell(0, 0), [])
