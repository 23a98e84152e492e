"""Player state, keyboard state and movement through the map."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

PLANE = 0.66
MOVE_SPEED = 0.05
ROTATION_SPEED = 0.05
PRECISION = 0.0001
WALL = "1"


class Key(Enum):
    """Keys the game reacts to."""

    ESCAPE = "escape"
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"

    @classmethod
    def from_keysym(cls, code: int) -> Optional["Key"]:
        """Return the key for an X keysym, or None if it is not used."""
        return _KEYSYMS.get(code)


_KEYSYMS = {
    0xFF1B: Key.ESCAPE,
    ord("w"): Key.W,
    ord("W"): Key.W,
    ord("a"): Key.A,
    ord("A"): Key.A,
    ord("s"): Key.S,
    ord("S"): Key.S,
    ord("d"): Key.D,
    ord("D"): Key.D,
    0xFF51: Key.LEFT,
    0xFF52: Key.UP,
    0xFF53: Key.RIGHT,
    0xFF54: Key.DOWN,
}


def _as_key(key: Union[Key, int]) -> Optional[Key]:
    return key if isinstance(key, Key) else Key.from_keysym(key)


@dataclass
class Keys:
    """The set of keys currently held down."""

    pressed: set = field(default_factory=set)

    def press(self, key: Union[Key, int]) -> None:
        """Mark ``key`` (a Key or an X keysym) as held; unknown keys are ignored."""
        found = _as_key(key)
        if found is not None:
            self.pressed.add(found)

    def release(self, key: Union[Key, int]) -> None:
        """Mark ``key`` as no longer held."""
        found = _as_key(key)
        if found is not None:
            self.pressed.discard(found)

    def __contains__(self, key: object) -> bool:
        return key in self.pressed


def _cell(grid: Sequence[str], col: float, row: float) -> str:
    x, y = int(col), int(row)
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return WALL


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    facing: str

    def move(self, grid: Sequence[str], dx: float, dy: float, sign: int) -> None:
        """Step by (dx, dy) forwards (sign 1) or backwards (sign -1).

        Each axis moves only if the cell it leads into is not a wall;
        cells outside the map count as walls.
        """
        if sign == 1:
            if _cell(grid, self.x + dx, self.y) != WALL:
                self.x += dx - PRECISION
            if _cell(grid, self.x, self.y + dy) != WALL:
                self.y += dy - PRECISION
        elif sign == -1:
            if _cell(grid, self.x - dx, self.y) != WALL:
                self.x -= dx + PRECISION
            if _cell(grid, self.x, self.y - dy) != WALL:
                self.y -= dy + PRECISION
        else:
            raise ValueError(f"sign must be 1 or -1, got {sign!r}")

    def turn(self, angle: float) -> None:
        """Rotate the direction and camera plane by ``angle`` radians."""
        cos, sin = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos - self.dir_y * sin,
            self.dir_x * sin + self.dir_y * cos,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos - self.plane_y * sin,
            self.plane_x * sin + self.plane_y * cos,
        )

    def update(self, keys: Keys, grid: Sequence[str]) -> None:
        """Move and turn according to the held keys. Escape is left to the caller."""
        if Key.UP in keys or Key.W in keys:
            self.move(grid, self.dir_x * MOVE_SPEED, self.dir_y * MOVE_SPEED, 1)
        if Key.DOWN in keys or Key.S in keys:
            self.move(grid, self.dir_x * MOVE_SPEED, self.dir_y * MOVE_SPEED, -1)
        if Key.A in keys:
            self.move(grid, self.plane_x * MOVE_SPEED, self.plane_y * MOVE_SPEED, -1)
        if Key.D in keys:
            self.move(grid, self.plane_x * MOVE_SPEED, self.plane_y * MOVE_SPEED, 1)
        vertical = self.facing in ("N", "S")
        horizontal = self.facing in ("E", "W")
        left, right = Key.LEFT in keys, Key.RIGHT in keys
        if (left and vertical) or (right and horizontal):
            self.turn(ROTATION_SPEED)
        if (left and horizontal) or (right and vertical):
            self.turn(-ROTATION_SPEED)


_SPAWN = {
    "N": (0.0, -1.0, PLANE, 0.0),
    "E": (1.0, 0.0, 0.0, -PLANE),
    "S": (0.0, 1.0, -PLANE, 0.0),
    "W": (-1.0, 0.0, 0.0, PLANE),
}


def spawn_player(facing: str, x: int, y: int) -> Player:
    """Place a player in the centre of cell (x, y), facing N, E, S or W."""
    try:
        dir_x, dir_y, plane_x, plane_y = _SPAWN[facing]
    except KeyError:
        raise ValueError(f"invalid facing: {facing!r}") from None
    return Player(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y, facing)