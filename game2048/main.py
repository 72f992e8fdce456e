#!/usr/bin/env python3
"""
2048 Game - entry point
Runs games until the player quits, keeping the best score between games.
"""
import logging
import sys
from typing import List, Optional

from game2048.config import GameConfig, configure_logging, parse_config
from game2048.direction import DIRECTION_KEYS, normalize_key
from game2048.display import Display, LoggingDisplay, ScriptedDisplay, ScriptReader
from game2048.game import Game2048
from game2048.tiles import RandomTileSource, ScriptedTileSource

logger = logging.getLogger(__name__)


def play(game: Game2048, tiles) -> bool:
    """
    Play one game on GAME, taking new tiles from TILES and commands from
    the game's display. Returns True if another game should follow, False
    to exit.
    """
    display = game.display
    game.clear()
    game.place_random_tile(tiles)
    while True:
        game.place_random_tile(tiles)
        display.refresh()
        if game.is_game_over():
            logger.debug("Game over (%s), score %d", game.state().value, game.score)
            game.end_game()

        while True:
            key = normalize_key(display.read_command())
            if key in DIRECTION_KEYS:
                # Moves are ignored once the game has ended
                if not game.is_game_over() and game.move(key):
                    break
            elif key == 'New Game':
                return True
            elif key == 'Quit':
                return False


def build_display(config: GameConfig, reader: Optional[ScriptReader]) -> Display:
    if not config.display:
        display = Display()
    elif config.terminal:
        from game2048.terminal import TerminalDisplay
        display = TerminalDisplay()
    else:
        from game2048.gui import WindowDisplay
        display = WindowDisplay()
    if reader is not None:
        display = ScriptedDisplay(reader, display)
    if config.log:
        display = LoggingDisplay(display)
    return display


def run(config: GameConfig) -> int:
    reader = None
    if config.testing:
        reader = ScriptReader(sys.stdin)
        tiles = ScriptedTileSource(reader)
    else:
        tiles = RandomTileSource(config.seed)
        if not config.display:
            # Headless games still read their commands from stdin
            reader = ScriptReader(sys.stdin)

    display = build_display(config, reader)
    game = Game2048(display=display)
    try:
        while play(game, tiles):
            continue
    finally:
        display.close()
    if not config.display:
        sys.stdout.write(f"Score: {game.score} Best: {max(game.max_score, game.score)}\n")
        sys.stdout.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)
    configure_logging(config)
    try:
        return run(config)
    except KeyboardInterrupt:
        sys.stdout.write("\nGame interrupted. Thanks for playing!\n")
        sys.stdout.flush()
        return 0
    except ValueError as e:
        # Malformed script or board input
        sys.stderr.write(f"Error: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
