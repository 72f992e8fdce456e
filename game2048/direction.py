from enum import Enum
from typing import Tuple

import numpy as np

SIZE = 4


class InvalidDirection(ValueError):
    """Raised for a key or side that does not name one of the four directions."""


class Side(Enum):
    """The four edges of the board a tilt can push tiles toward."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Side":
        return Side((self.value + 2) % 4)


# Raw keys as delivered by the different input sources
KEY_ALIASES = {
    '↑': 'Up', '↓': 'Down', '←': 'Left', '→': 'Right',
    'up': 'Up', 'down': 'Down', 'left': 'Left', 'right': 'Right',
    'w': 'Up', 's': 'Down', 'a': 'Left', 'd': 'Right',
    'new game': 'New Game', 'n': 'New Game',
    'quit': 'Quit', 'q': 'Quit',
}

KEY_TO_SIDE = {
    'Up': Side.NORTH,
    'Down': Side.SOUTH,
    'Left': Side.WEST,
    'Right': Side.EAST,
}

DIRECTION_KEYS = tuple(KEY_TO_SIDE)


def normalize_key(key: str) -> str:
    """Map arrows, WASD and any-case words to 'Up', 'Down', 'Left', 'Right', 'New Game' or 'Quit'.

    Unknown keys come back stripped but otherwise untouched.
    """
    key = key.strip()
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    return KEY_ALIASES.get(key.lower(), key)


def key_to_side(key: str) -> Side:
    key = normalize_key(key)
    if key not in KEY_TO_SIDE:
        raise InvalidDirection(f"Unknown direction key: {key!r}")
    return KEY_TO_SIDE[key]


def _check_side(side) -> Side:
    if not isinstance(side, Side):
        raise InvalidDirection(f"Unknown direction: {side!r}")
    return side


def tilt_row(side: Side, r, c, size: int = SIZE):
    """
    Row on the real board for row r, column c of a board turned so that
    row 0 faces SIDE. Works elementwise on numpy index arrays as well.
    """
    side = _check_side(side)
    if side is Side.NORTH:
        return r
    if side is Side.EAST:
        return c
    if side is Side.SOUTH:
        return size - 1 - r
    return size - 1 - c


def tilt_col(side: Side, r, c, size: int = SIZE):
    """Column counterpart of tilt_row."""
    side = _check_side(side)
    if side is Side.NORTH:
        return c
    if side is Side.EAST:
        return size - 1 - r
    if side is Side.SOUTH:
        return c
    return r


def to_real(side: Side, r: int, c: int, size: int = SIZE) -> Tuple[int, int]:
    """Map canonical (r, c) to real board coordinates."""
    return int(tilt_row(side, r, c, size)), int(tilt_col(side, r, c, size))


def to_canonical(side: Side, row: int, col: int, size: int = SIZE) -> Tuple[int, int]:
    """Inverse of to_real for the same side."""
    side = _check_side(side)
    if side is Side.NORTH:
        return row, col
    if side is Side.EAST:
        return size - 1 - col, row
    if side is Side.SOUTH:
        return size - 1 - row, col
    return col, size - 1 - row


def canonical_indices(side: Side, size: int = SIZE) -> Tuple[np.ndarray, np.ndarray]:
    """
    Index arrays (rows, cols) such that board[rows, cols] is the canonical
    snapshot of a real board for SIDE.
    """
    r, c = np.indices((size, size))
    return tilt_row(side, r, c, size), tilt_col(side, r, c, size)
