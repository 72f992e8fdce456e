"""
Display and input collaborators for the game engine.

The engine only talks to a Display through the report_* calls and the
session loop only reads commands through read_command, so a headless run,
a scripted test run and an interactive window all look the same to it.
"""
import logging
from typing import Iterable, List, Optional, TextIO

from game2048.events import MergeEvent, MoveEvent, SpawnEvent


class Display:
    """Headless display: every report is dropped and input is always 'Quit'."""

    def read_command(self) -> str:
        """Block until the next player command and return the raw key."""
        return 'Quit'

    def report_tile(self, value: int, row: int, col: int) -> None:
        pass

    def report_move(self, value: int, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        pass

    def report_merge(self, old_value: int, new_value: int,
                     from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        pass

    def report_score(self, score: int, max_score: int) -> None:
        pass

    def report_game_end(self, won: bool = False) -> None:
        """WON is True when the game ended by reaching the target score."""

    def clear_display(self) -> None:
        pass

    def refresh(self) -> None:
        """Called once after all moves of a tilt have been reported."""

    def close(self) -> None:
        pass


class RecordingDisplay(Display):
    """Keeps every reported event; feeds commands from a fixed list."""

    def __init__(self, commands: Iterable[str] = ()):
        self.commands = list(commands)
        self.events: List[object] = []
        self.score = 0
        self.max_score = 0
        self.game_ended = False
        self.won = False
        self.clears = 0

    def read_command(self) -> str:
        if not self.commands:
            return 'Quit'
        return self.commands.pop(0)

    def report_tile(self, value, row, col):
        self.events.append(SpawnEvent(value, row, col))

    def report_move(self, value, from_row, from_col, to_row, to_col):
        self.events.append(MoveEvent(value, from_row, from_col, to_row, to_col))

    def report_merge(self, old_value, new_value, from_row, from_col, to_row, to_col):
        self.events.append(MergeEvent(old_value, new_value, from_row, from_col, to_row, to_col))

    def report_score(self, score, max_score):
        self.score = score
        self.max_score = max_score

    def report_game_end(self, won=False):
        self.game_ended = True
        self.won = won

    def clear_display(self):
        self.clears += 1
        self.game_ended = False
        self.won = False

    def moves(self) -> List[MoveEvent]:
        return [e for e in self.events if isinstance(e, MoveEvent)]

    def merges(self) -> List[MergeEvent]:
        return [e for e in self.events if isinstance(e, MergeEvent)]

    def spawns(self) -> List[SpawnEvent]:
        return [e for e in self.events if isinstance(e, SpawnEvent)]


class DisplayWrapper(Display):
    """Forwards everything to an inner display."""

    def __init__(self, inner: Optional[Display] = None):
        self.inner = inner if inner is not None else Display()

    def read_command(self):
        return self.inner.read_command()

    def report_tile(self, value, row, col):
        self.inner.report_tile(value, row, col)

    def report_move(self, value, from_row, from_col, to_row, to_col):
        self.inner.report_move(value, from_row, from_col, to_row, to_col)

    def report_merge(self, old_value, new_value, from_row, from_col, to_row, to_col):
        self.inner.report_merge(old_value, new_value, from_row, from_col, to_row, to_col)

    def report_score(self, score, max_score):
        self.inner.report_score(score, max_score)

    def report_game_end(self, won=False):
        self.inner.report_game_end(won)

    def clear_display(self):
        self.inner.clear_display()

    def refresh(self):
        self.inner.refresh()

    def close(self):
        self.inner.close()


class ScriptReader:
    """
    Line source shared by the scripted command and tile collaborators.
    Blank lines and '#' comments are skipped.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream

    def next_line(self) -> Optional[str]:
        """Next meaningful line, or None at end of input."""
        for line in self.stream:
            line = line.split('#', 1)[0].strip()
            if line:
                return line
        return None


class ScriptedDisplay(DisplayWrapper):
    """Takes commands from a script instead of the inner display; end of input means 'Quit'."""

    def __init__(self, reader: ScriptReader, inner: Optional[Display] = None):
        super().__init__(inner)
        self.reader = reader

    def read_command(self):
        line = self.reader.next_line()
        return 'Quit' if line is None else line


class LoggingDisplay(DisplayWrapper):
    """
    Writes a transcript of every command read and every tile added.
    The transcript uses the scripted input format, so it can be replayed
    with --testing.
    """

    def __init__(self, inner: Optional[Display] = None, transcript: Optional[logging.Logger] = None):
        super().__init__(inner)
        self.transcript = transcript or logging.getLogger('game2048.transcript')

    def read_command(self):
        key = self.inner.read_command()
        self.transcript.info('%s', key)
        return key

    def report_tile(self, value, row, col):
        self.transcript.info('%d %d %d', value, row, col)
        self.inner.report_tile(value, row, col)
