"""
Tests for the safety filter.
"""

from battlerat.grid import Cell, Direction
from battlerat.safety import (
    SafetyMap,
    prevent_body_collision,
    prevent_head_to_head,
    prevent_out_of_bounds,
    safe_moves,
)
from conftest import make_board, make_snake


class TestSafetyMap:
    """Tests for the four-way safety value."""

    def test_starts_all_safe(self):
        assert SafetyMap().safe_directions() == list(Direction)

    def test_narrow_returns_new_map(self):
        original = SafetyMap()
        narrowed = original.narrow(Direction.LEFT)
        assert original.is_safe(Direction.LEFT)
        assert not narrowed.is_safe(Direction.LEFT)
        assert narrowed.safe_directions() == [Direction.UP, Direction.DOWN, Direction.RIGHT]

    def test_any_safe(self):
        blocked = SafetyMap(up=False, down=False, left=False, right=False)
        assert not blocked.any_safe()
        assert blocked.narrow(Direction.UP) == blocked


class TestOutOfBounds:
    """Tests for the wall check."""

    def test_corner_blocks_left_and_down(self, corner_board):
        """Head on (0, 0) can only go up or right."""
        is_move_safe = safe_moves(Cell(0, 0), corner_board)
        assert not is_move_safe.is_safe(Direction.LEFT)
        assert not is_move_safe.is_safe(Direction.DOWN)
        assert is_move_safe.safe_directions() == [Direction.UP, Direction.RIGHT]

    def test_top_right_corner(self):
        board = make_board(width=7, height=7)
        is_move_safe = prevent_out_of_bounds(Cell(6, 6), board, SafetyMap())
        assert is_move_safe.safe_directions() == [Direction.DOWN, Direction.LEFT]


class TestBodyCollision:
    """Tests for the body check."""

    def test_own_neck_is_blocked(self, empty_board):
        is_move_safe = safe_moves(Cell(5, 5), empty_board)
        assert not is_move_safe.is_safe(Direction.DOWN)
        assert is_move_safe.safe_directions() == [Direction.UP, Direction.LEFT, Direction.RIGHT]

    def test_other_bodies_are_blocked(self):
        board = make_board(
            make_snake("me", (5, 5), (5, 4)),
            make_snake("them", (9, 6), (8, 6), (7, 6), (6, 6), (6, 5), (6, 4)),
        )
        is_move_safe = prevent_body_collision(Cell(5, 5), board, SafetyMap())
        assert not is_move_safe.is_safe(Direction.RIGHT)
        assert not is_move_safe.is_safe(Direction.DOWN)
        assert is_move_safe.is_safe(Direction.UP)

    def test_only_narrows(self):
        """A direction already ruled out is never made safe again."""
        board = make_board(make_snake("me", (5, 5)))
        start = SafetyMap(up=False)
        assert not prevent_body_collision(Cell(5, 5), board, start).is_safe(Direction.UP)


class TestHeadToHead:
    """Tests for the contested cell check and its fallback."""

    def test_contested_cell_excluded_for_both(self):
        """Two heads two apart both lose the cell between them."""
        me = make_snake("me", (3, 5), (2, 5), (1, 5))
        them = make_snake("them", (5, 5), (6, 5), (7, 5))
        board = make_board(me, them)

        mine = safe_moves(me.head, board)
        theirs = safe_moves(them.head, board)

        assert not mine.is_safe(Direction.RIGHT)
        assert not theirs.is_safe(Direction.LEFT)
        assert mine.safe_directions() == [Direction.UP, Direction.DOWN]
        assert theirs.safe_directions() == [Direction.UP, Direction.DOWN]

    def test_fallback_restores_when_everything_contested(self):
        """Boxed in with one exit that another head also reaches: take the risk."""
        me = make_snake("me", (0, 5), (0, 4), (0, 3))
        wall = make_snake("wall", (2, 6), (1, 6), (0, 6))
        them = make_snake("them", (2, 5), (3, 5), (4, 5))
        board = make_board(me, wall, them)

        without_head_to_head = prevent_body_collision(
            me.head, board, prevent_out_of_bounds(me.head, board, SafetyMap())
        )
        assert without_head_to_head.safe_directions() == [Direction.RIGHT]

        assert safe_moves(me.head, board) == without_head_to_head

    def test_fallback_keeps_partial_narrowing(self):
        """Fallback only applies when nothing would be left."""
        me = make_snake("me", (5, 5), (5, 4))
        them = make_snake("them", (7, 5), (8, 5))
        board = make_board(me, them)
        is_move_safe = prevent_head_to_head(me.head, board, SafetyMap(down=False))
        assert is_move_safe.safe_directions() == [Direction.UP, Direction.LEFT]

    def test_own_head_is_not_a_threat(self, empty_board):
        is_move_safe = prevent_head_to_head(Cell(5, 5), empty_board, SafetyMap())
        assert is_move_safe == SafetyMap()


class TestDeterminism:
    """The filter is a pure function of the board."""

    def test_repeated_calls_agree(self):
        board = make_board(
            make_snake("me", (4, 4), (4, 3), (4, 2)),
            make_snake("them", (6, 4), (6, 5), (6, 6)),
            food=[(5, 5)],
        )
        first = safe_moves(Cell(4, 4), board)
        for _ in range(10):
            assert safe_moves(Cell(4, 4), board) == first
