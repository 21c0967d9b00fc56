"""
Pytest configuration and board builders for battlerat tests.
"""

import pytest

from battlerat.grid import Board, Cell, Snake


def cells(*points):
    return tuple(Cell(x, y) for x, y in points)


def make_snake(snake_id, *points, health=100):
    return Snake(id=snake_id, body=cells(*points), health=health, name=snake_id)


def make_board(*snakes, width=11, height=11, food=(), hazards=()):
    return Board(
        width=width,
        height=height,
        food=cells(*food),
        hazards=frozenset(cells(*hazards)),
        snakes=tuple(snakes),
    )


def point(cell):
    return {"x": cell.x, "y": cell.y}


def game_state(board, you_id="me", turn=3):
    """Battlesnake API JSON for a board, as the engine would send it."""
    snakes = [
        {
            "id": snake.id,
            "name": snake.name,
            "health": snake.health,
            "body": [point(part) for part in snake.body],
            "head": point(snake.head),
            "length": snake.length,
            "latency": "0",
            "shout": "",
        }
        for snake in board.snakes
    ]
    you = dict(next(snake for snake in snakes if snake["id"] == you_id))
    return {
        "game": {"id": "game-1", "ruleset": {"name": "standard"}, "timeout": 500},
        "turn": turn,
        "board": {
            "width": board.width,
            "height": board.height,
            "food": [point(cell) for cell in board.food],
            "hazards": [point(cell) for cell in sorted(board.hazards)],
            "snakes": snakes,
        },
        "you": you,
    }


@pytest.fixture
def lone_snake():
    """Length three snake in the middle of an empty 11x11 board, heading up."""
    return make_snake("me", (5, 5), (5, 4), (5, 3))


@pytest.fixture
def empty_board(lone_snake):
    return make_board(lone_snake)


@pytest.fixture
def corner_board():
    """Fresh snake stacked on (0, 0), as at the start of a game."""
    return make_board(make_snake("me", (0, 0), (0, 0), (0, 0)))
