import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class GameConfig:
    seed: int = 0
    log: bool = False
    testing: bool = False
    display: bool = True
    terminal: bool = False
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game2048",
        description="Play 2048 with arrow keys or WASD; 'n' starts a new game, 'q' quits",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--seed', type=int, default=0, help='Random seed for new tiles')
    parser.add_argument('--log', action='store_true', help='Record commands and random tiles on stdout')
    parser.add_argument('--testing', action='store_true',
                        help='Take random tiles and commands from standard input')
    parser.add_argument('--no-display', dest='display', action='store_false', help='Run without a display')
    parser.add_argument('--terminal', action='store_true', help='Draw in the terminal instead of a window')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')
    return parser


def parse_config(argv: Optional[List[str]] = None) -> GameConfig:
    """Parse command line options. Malformed options exit with status 2."""
    args = build_parser().parse_args(argv)
    if args.seed < 0:
        build_parser().error('--seed must be non-negative')
    return GameConfig(
        seed=args.seed,
        log=args.log,
        testing=args.testing,
        display=args.display,
        terminal=args.terminal,
        verbose=args.verbose,
    )


def configure_logging(config: GameConfig):
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
        stream=sys.stderr,
    )
    transcript = logging.getLogger('game2048.transcript')
    transcript.propagate = False
    if config.log and not transcript.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(message)s'))
        transcript.addHandler(handler)
    transcript.setLevel(logging.INFO if config.log else logging.WARNING)
