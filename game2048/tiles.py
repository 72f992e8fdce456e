"""Random-tile collaborators: each yields (value, row, col) triples."""
from typing import Optional, Tuple

import numpy as np

from game2048.direction import SIZE
from game2048.display import ScriptReader


class RandomTileSource:
    """
    Picks a value (2 with probability 0.9, otherwise 4) and any cell of the
    board. The cell may be occupied; the game retries until it hits an
    empty one.
    """

    def __init__(self, seed: Optional[int] = None, size: int = SIZE):
        self.size = size
        self.rng = np.random.default_rng(seed)

    def next_tile(self) -> Tuple[int, int, int]:
        val = 2 if self.rng.random() < 0.9 else 4
        row, col = self.rng.integers(0, self.size, size=2)
        return val, int(row), int(col)


class ScriptedTileSource:
    """Reads 'value row col' lines from a script (the --testing mode)."""

    def __init__(self, reader: ScriptReader):
        self.reader = reader

    def next_tile(self) -> Tuple[int, int, int]:
        line = self.reader.next_line()
        if line is None:
            raise ValueError("Script ended while a tile was expected")
        parts = line.split()
        if len(parts) != 3:
            raise ValueError(f"Expected 'value row col', got {line!r}")
        try:
            val, row, col = (int(p) for p in parts)
        except ValueError:
            raise ValueError(f"Expected 'value row col', got {line!r}") from None
        return val, row, col
