"""
Per-turn board model: cells, directions, snakes and the board they live on.

Everything here is immutable and rebuilt from the incoming game state every turn.
(0, 0) is the bottom-left corner, "up" grows y.
"""

import typing
from dataclasses import dataclass
from enum import Enum
from functools import cached_property


class SnapshotError(ValueError):
    """Raised when a game state does not describe a well-formed board."""


@dataclass(frozen=True, order=True)
class Cell:
    x: int
    y: int

    def step(self, direction: "Direction") -> "Cell":
        dx, dy = MOVE_DELTAS[direction]
        return Cell(self.x + dx, self.y + dy)

    def distance(self, other: "Cell") -> int:
        """Manhattan distance."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def direction_to(self, other: "Cell") -> typing.Optional["Direction"]:
        """Direction of an adjacent cell, None when the cells are not neighbors."""
        for direction in Direction:
            if self.step(direction) == other:
                return direction
        return None

    def neighbors(self) -> typing.List["Cell"]:
        return [self.step(direction) for direction in Direction]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def __str__(self):
        return self.value


MOVE_DELTAS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Snake:
    id: str
    body: typing.Tuple[Cell, ...]
    health: int = 100
    name: str = ""

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    @property
    def length(self) -> int:
        return len(self.body)

    @classmethod
    def from_dict(cls, data: typing.Dict) -> "Snake":
        try:
            body = tuple(_parse_cell(part) for part in data["body"])
            snake = cls(
                id=str(data["id"]),
                body=body,
                health=int(data.get("health", 100)),
                name=data.get("name", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Invalid snake {data!r}: {e}") from e
        if not body:
            raise SnapshotError(f"Snake {snake.id} has an empty body")
        return snake


@dataclass(frozen=True)
class Board:
    width: int
    height: int
    food: typing.Tuple[Cell, ...] = ()
    hazards: typing.FrozenSet[Cell] = frozenset()
    snakes: typing.Tuple[Snake, ...] = ()

    @cached_property
    def occupied(self) -> typing.FrozenSet[Cell]:
        """Every cell covered by any snake body, heads and tails included."""
        return frozenset(part for snake in self.snakes for part in snake.body)

    @cached_property
    def heads(self) -> typing.Tuple[Cell, ...]:
        return tuple(snake.head for snake in self.snakes)

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def is_occupied(self, cell: Cell) -> bool:
        return cell in self.occupied

    def neighbor(self, cell: Cell, direction: Direction) -> Cell:
        # Off-board results are returned as-is, callers check bounds themselves.
        return cell.step(direction)

    def snake(self, snake_id: str) -> Snake:
        for snake in self.snakes:
            if snake.id == snake_id:
                return snake
        raise SnapshotError(f"No snake with id {snake_id!r} on the board")

    def render(self, path: typing.Iterable[Cell] = ()) -> str:
        """
        Draw the board as text, top row first.

        a = food, x = hazard, h = snake head, O = snake body, + = path, _ = empty
        """
        path = set(path)
        heads = set(self.heads)
        lines = ["  |" + "".join(f"{x}|" for x in range(self.width))]
        for y in reversed(range(self.height)):
            row = f"{y:2}|"
            for x in range(self.width):
                cell = Cell(x, y)
                if cell in heads:
                    mark = "h"
                elif cell in self.occupied:
                    mark = "O"
                elif cell in self.food:
                    mark = "a"
                elif cell in path:
                    mark = "+"
                elif cell in self.hazards:
                    mark = "x"
                else:
                    mark = "_"
                row += mark + "|"
            lines.append(row)
        return "\n".join(lines)

    @classmethod
    def from_dict(cls, data: typing.Dict) -> "Board":
        """Build a board from the "board" object of a Battlesnake game state."""
        try:
            width = int(data["width"])
            height = int(data["height"])
            food = tuple(_parse_cell(point) for point in data.get("food", []))
            hazards = frozenset(_parse_cell(point) for point in data.get("hazards", []))
            snakes_data = data["snakes"]
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Invalid board: {e}") from e
        if width <= 0 or height <= 0:
            raise SnapshotError(f"Invalid board size {width}x{height}")
        try:
            snakes = tuple(Snake.from_dict(snake) for snake in snakes_data)
        except TypeError as e:
            raise SnapshotError(f"Invalid snakes {snakes_data!r}: {e}") from e
        return cls(width=width, height=height, food=food, hazards=hazards, snakes=snakes)


@dataclass(frozen=True)
class Snapshot:
    """Everything the engine gets to see for one turn."""

    game_id: str
    turn: int
    board: Board
    you_id: str

    @property
    def you(self) -> Snake:
        return self.board.snake(self.you_id)

    @classmethod
    def from_game_state(cls, game_state: typing.Dict) -> "Snapshot":
        if not isinstance(game_state, dict):
            raise SnapshotError("Game state must be a JSON object")
        try:
            game_id = str(game_state.get("game", {}).get("id", ""))
            turn = int(game_state.get("turn", 0))
            board_data = game_state["board"]
            you_id = str(game_state["you"]["id"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Invalid game state: {e}") from e
        snapshot = cls(
            game_id=game_id, turn=turn, board=Board.from_dict(board_data), you_id=you_id
        )
        # Fail now rather than halfway through a decision.
        snapshot.board.snake(you_id)
        return snapshot


def _parse_cell(point: typing.Dict) -> Cell:
    return Cell(int(point["x"]), int(point["y"]))
