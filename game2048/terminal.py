"""
2048 Game - terminal display
Draws the board with ANSI colors and reads arrow keys or WASD in raw mode.
"""
import os
import sys
import termios
import tty

import numpy as np

from game2048.direction import SIZE
from game2048.display import Display

# High-contrast ANSI colors
COLORS = {
    2: '\033[97m',    # white
    4: '\033[90m',    # bright black
    8: '\033[36m',    # cyan
    16: '\033[31m',   # red
    32: '\033[32m',   # green
    64: '\033[33m',   # yellow
    128: '\033[35m',  # magenta
    256: '\033[34m',  # blue
    512: '\033[91m',  # bright red
    1024: '\033[92m', # bright green
    2048: '\033[95m', # bright magenta
}
RESET = '\033[0m'
BOLD = '\033[1m'
RED = '\033[91m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
BLUE = '\033[94m'

ARROWS = {'A': 'Up', 'B': 'Down', 'C': 'Right', 'D': 'Left'}


def clear_screen():
    os.system('clear' if os.name == 'posix' else 'cls')


def format_tile(value: int) -> str:
    if value == 0:
        return "     "
    color = COLORS.get(value, YELLOW)
    num_str = str(value)
    padding = " " * (5 - len(num_str))
    return f"{padding}{color}{BOLD}{num_str}{RESET}"


def get_key() -> str:
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


class TerminalDisplay(Display):
    """Keeps its own copy of the tiles, built from the reported events."""

    def __init__(self, size: int = SIZE):
        self.n = size
        self.tiles = np.zeros((size, size), dtype=int)
        self.score = 0
        self.max_score = 0
        self.over = False
        self.won = False

    def read_command(self) -> str:
        ch = get_key()
        if ch == '\x1b':
            if get_key() == '[':
                return ARROWS.get(get_key(), '')
            return ''
        if ch == '\x03':
            raise KeyboardInterrupt
        # normalize_key handles w/a/s/d, n and q
        return ch

    def report_tile(self, value, row, col):
        self.tiles[row, col] = value

    def report_move(self, value, from_row, from_col, to_row, to_col):
        self.tiles[from_row, from_col] = 0
        self.tiles[to_row, to_col] = value

    def report_merge(self, old_value, new_value, from_row, from_col, to_row, to_col):
        self.tiles[from_row, from_col] = 0
        self.tiles[to_row, to_col] = new_value

    def report_score(self, score, max_score):
        self.score = score
        self.max_score = max_score

    def report_game_end(self, won=False):
        self.over = True
        self.won = won
        self.refresh()

    def clear_display(self):
        self.tiles[:] = 0
        self.over = False
        self.won = False

    def refresh(self):
        clear_screen()
        out = sys.stdout
        out.write(f"{BOLD}2048 Game{RESET}\n")
        out.write(f"Score: {GREEN}{self.score}{RESET} | Best: {BLUE}{self.max_score}{RESET}\n")
        out.write("Use arrow keys or WASD to move, 'n' for a new game, 'q' to quit\n\n")

        out.write("┌" + "┬".join(["─────"] * self.n) + "┐\n")
        for i in range(self.n):
            out.write("│" + "│".join(format_tile(int(v)) for v in self.tiles[i]) + "│\n")
            if i < self.n - 1:
                out.write("├" + "┼".join(["─────"] * self.n) + "┤\n")
        out.write("└" + "┴".join(["─────"] * self.n) + "┘\n\n")
        if self.over and self.won:
            out.write(f"{YELLOW}{BOLD}YOU WIN!{RESET} Final Score: {GREEN}{self.score}{RESET}\n")
        elif self.over:
            out.write(f"{RED}{BOLD}GAME OVER!{RESET} Final Score: {GREEN}{self.score}{RESET}\n")
        out.flush()
