import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from game2048.direction import SIZE, Side, canonical_indices, key_to_side, to_real
from game2048.display import Display

# Score that wins the game
TARGET = 2048

logger = logging.getLogger(__name__)


class GameState(Enum):
    PLAYING = 'playing'
    WON = 'won'
    LOST = 'lost'


class Game2048:
    """
    One game session: the board, the current score, the best score over all
    games played with this object and the number of tiles on the board.

    The board only changes through tile placement and tilts. Every tile that
    slides or merges during a tilt is reported to the display in real board
    coordinates.
    """

    def __init__(self, size: int = SIZE, target: int = TARGET, display: Optional[Display] = None):
        self.n = size
        self.target = target
        self.display = display if display is not None else Display()
        self.board = np.zeros((self.n, self.n), dtype=int)
        self.score = 0
        self.max_score = 0
        self.count = 0

    @property
    def squares(self) -> int:
        return self.n * self.n

    def clear(self):
        """Start a new game: empty board, score 0. The best score is kept."""
        self.max_score = max(self.max_score, self.score)
        self.score = 0
        self.count = 0
        self.board = np.zeros((self.n, self.n), dtype=int)
        self.display.clear_display()
        self.display.report_score(self.score, self.max_score)

    def load(self, rows: Sequence[Sequence[int]]):
        """Replace the board with ROWS and recount the tiles."""
        board = np.array(rows, dtype=int)
        if board.shape != (self.n, self.n):
            raise ValueError(f"Board must be {self.n}x{self.n}, got shape {board.shape}")
        tiles = board[board != 0]
        if np.any(tiles < 2) or np.any(tiles & (tiles - 1)):
            raise ValueError("Tile values must be powers of two >= 2")
        self.board = board
        self.count = int(np.count_nonzero(board))

    def copy(self) -> "Game2048":
        """Headless copy of the current position."""
        other = Game2048(self.n, self.target)
        other.board = self.board.copy()
        other.score = self.score
        other.max_score = self.max_score
        other.count = self.count
        return other

    # ---------- Tile placement ----------

    def add_tile(self, value: int, row: int, col: int) -> bool:
        """Put VALUE at (row, col) if that cell is empty. Returns True if placed."""
        if value not in (2, 4):
            raise ValueError(f"New tiles must be 2 or 4, got {value}")
        if not (0 <= row < self.n and 0 <= col < self.n):
            raise ValueError(f"Cell ({row}, {col}) is off the board")
        if self.board[row, col] != 0:
            return False
        self.board[row, col] = value
        self.count += 1
        self.display.report_tile(value, row, col)
        return True

    def place_random_tile(self, source) -> Optional[Tuple[int, int, int]]:
        """
        Ask SOURCE for (value, row, col) triples until one lands on an empty
        cell. Does nothing and returns None when the board is full.
        """
        if self.count == self.squares:
            logger.debug("Board full, skipping tile placement")
            return None
        while True:
            value, row, col = source.next_tile()
            if self.add_tile(value, row, col):
                logger.debug("Placed %d at (%d, %d)", value, row, col)
                return value, row, col

    # ---------- Tilting ----------

    def move(self, direction: Union[str, Side]) -> bool:
        """Tilt toward a key such as 'Up' or '←', or a Side."""
        side = direction if isinstance(direction, Side) else key_to_side(direction)
        return self.tilt(side)

    def tilt(self, side: Side) -> bool:
        """
        Slide and merge all tiles toward SIDE. Returns True iff the board
        changed.

        The work is done on a canonical snapshot in which SIDE is row 0, one
        column at a time, nearest tiles first. A tile slides up over empty
        cells and merges with the tile it stops against when the values
        match and that tile is not itself the product of a merge in this
        tilt.
        """
        before = self.board.copy()
        rows, cols = canonical_indices(side, self.n)
        cboard = self.board[rows, cols]

        for c in range(self.n):
            merged = [False] * self.n
            for r in range(self.n):
                value = int(cboard[r, c])
                if value == 0:
                    continue
                dest = r - self._slide_distance(cboard, r, c)
                if self._above(cboard, dest, c) == value and not merged[dest - 1]:
                    self._merge(side, cboard, r, c, dest - 1)
                    merged[dest - 1] = True
                elif dest != r:
                    self._slide(side, cboard, r, c, dest)

        changed = not np.array_equal(before, self.board)
        logger.debug("Tilt %s: changed=%s score=%d tiles=%d", side.name, changed, self.score, self.count)
        self.display.report_score(self.score, self.max_score)
        self.display.refresh()
        return changed

    @staticmethod
    def _slide_distance(cboard: np.ndarray, r: int, c: int) -> int:
        """Number of empty cells between (r, c) and the next obstacle toward row 0."""
        dist = 0
        while r - dist - 1 >= 0 and cboard[r - dist - 1, c] == 0:
            dist += 1
        return dist

    @staticmethod
    def _above(cboard: np.ndarray, r: int, c: int) -> Optional[int]:
        if r - 1 < 0:
            return None
        return int(cboard[r - 1, c])

    def _slide(self, side: Side, cboard: np.ndarray, r: int, c: int, dest: int):
        value = int(cboard[r, c])
        fr, fc = to_real(side, r, c, self.n)
        tr, tc = to_real(side, dest, c, self.n)
        self.display.report_move(value, fr, fc, tr, tc)
        cboard[dest, c] = value
        cboard[r, c] = 0
        self.board[tr, tc] = value
        self.board[fr, fc] = 0

    def _merge(self, side: Side, cboard: np.ndarray, r: int, c: int, dest: int):
        value = int(cboard[r, c])
        merged_val = 2 * value
        fr, fc = to_real(side, r, c, self.n)
        tr, tc = to_real(side, dest, c, self.n)
        logger.debug("Merge %d -> %d at (%d, %d)", value, merged_val, tr, tc)
        self.display.report_merge(value, merged_val, fr, fc, tr, tc)
        cboard[dest, c] = merged_val
        cboard[r, c] = 0
        self.board[tr, tc] = merged_val
        self.board[fr, fc] = 0
        self.count -= 1
        self.score += merged_val

    def can_move(self, side: Side) -> bool:
        """True if tilting toward SIDE would change the board. Nothing is mutated."""
        return self.copy().tilt(side)

    def valid_moves(self) -> List[Side]:
        return [side for side in Side if self.can_move(side)]

    # ---------- End of game ----------

    def _cell(self, r: int, c: int) -> Optional[int]:
        """Value at (r, c), or None off the board."""
        if 0 <= r < self.n and 0 <= c < self.n:
            return int(self.board[r, c])
        return None

    def _has_adjacent_pair(self) -> bool:
        for r in range(self.n):
            for c in range(self.n):
                value = self._cell(r, c)
                if self._cell(r, c + 1) == value or self._cell(r + 1, c) == value:
                    return True
        return False

    def state(self) -> GameState:
        if self.score >= self.target:
            return GameState.WON
        if self.count == self.squares and not self._has_adjacent_pair():
            return GameState.LOST
        return GameState.PLAYING

    def is_game_over(self) -> bool:
        return self.state() is not GameState.PLAYING

    def end_game(self):
        """Record the final score and tell the display the game is over."""
        self.max_score = max(self.max_score, self.score)
        self.display.report_score(self.score, self.max_score)
        self.display.report_game_end(self.state() is GameState.WON)

    # ---------- Accessors ----------

    def get_state(self) -> np.ndarray:
        """Get current board state as numpy array."""
        return self.board.copy()

    def get_score(self) -> int:
        return self.score

    def get_max_tile(self) -> int:
        return int(np.max(self.board))
