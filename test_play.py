import io
import logging
import unittest
from unittest.mock import patch

import numpy as np

from game2048.config import GameConfig, parse_config
from game2048.display import LoggingDisplay, RecordingDisplay, ScriptedDisplay, ScriptReader
from game2048.game import Game2048, GameState
from game2048.main import main, play
from game2048.terminal import TerminalDisplay
from game2048.tiles import RandomTileSource, ScriptedTileSource


def scripted_tiles(text):
    return ScriptedTileSource(ScriptReader(io.StringIO(text)))


class TestPlay(unittest.TestCase):

    def test_move_spawns_a_tile(self):
        display = RecordingDisplay(['Left', 'Quit'])
        game = Game2048(display=display)
        self.assertFalse(play(game, scripted_tiles("2 0 0\n2 0 1\n4 3 3\n")))
        self.assertEqual(game.board[0, 0], 4)
        self.assertEqual(game.board[3, 3], 4)
        self.assertEqual(game.score, 4)
        self.assertEqual(game.count, 2)

    def test_unchanged_move_does_not_spawn(self):
        display = RecordingDisplay(['Up', 'sideways', 'Quit'])
        game = Game2048(display=display)
        # A spawn would run past the end of the script and raise
        play(game, scripted_tiles("2 0 0\n2 0 1\n"))
        self.assertEqual(game.count, 2)
        self.assertEqual(len(display.spawns()), 2)

    def test_new_game(self):
        display = RecordingDisplay(['Right', 'New Game'])
        game = Game2048(display=display)
        self.assertTrue(play(game, scripted_tiles("2 0 0\n2 0 1\n2 2 2\n")))
        self.assertEqual(game.score, 4)
        self.assertFalse(play(game, scripted_tiles("2 1 1\n4 2 2\n")))
        self.assertEqual(game.score, 0)
        self.assertEqual(game.max_score, 4)
        self.assertEqual(game.count, 2)

    def test_moves_ignored_after_win(self):
        display = RecordingDisplay(['Left', 'Left', 'Down', 'Quit'])
        game = Game2048(target=4, display=display)
        play(game, scripted_tiles("2 0 0\n2 0 1\n2 3 3\n"))
        self.assertEqual(game.state(), GameState.WON)
        self.assertTrue(display.game_ended)
        self.assertEqual(game.max_score, 4)
        np.testing.assert_array_equal(game.board, [
            [4, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 2],
        ])


class TestCollaborators(unittest.TestCase):

    def test_script_reader_skips_comments(self):
        reader = ScriptReader(io.StringIO("# header\n\nUp  # first move\n2 1 1\n"))
        self.assertEqual(reader.next_line(), 'Up')
        self.assertEqual(reader.next_line(), '2 1 1')
        self.assertIsNone(reader.next_line())

    def test_scripted_display_quits_at_end_of_input(self):
        inner = RecordingDisplay()
        display = ScriptedDisplay(ScriptReader(io.StringIO("Left\n")), inner)
        self.assertEqual(display.read_command(), 'Left')
        self.assertEqual(display.read_command(), 'Quit')
        display.report_tile(2, 0, 0)
        self.assertEqual(len(inner.spawns()), 1)

    def test_scripted_tiles(self):
        tiles = scripted_tiles("4 2 1\nUp\n")
        self.assertEqual(tiles.next_tile(), (4, 2, 1))
        with self.assertRaises(ValueError):
            tiles.next_tile()
        with self.assertRaises(ValueError):
            tiles.next_tile()

    def test_random_tiles(self):
        tiles = RandomTileSource(seed=7)
        drawn = [tiles.next_tile() for _ in range(200)]
        self.assertTrue(all(v in (2, 4) for v, _, _ in drawn))
        self.assertTrue(all(0 <= r < 4 and 0 <= c < 4 for _, r, c in drawn))
        self.assertIn(4, [v for v, _, _ in drawn])
        again = RandomTileSource(seed=7)
        self.assertEqual([again.next_tile() for _ in range(200)], drawn)

    def test_logging_display_transcript(self):
        display = LoggingDisplay(RecordingDisplay(['Up']))
        with self.assertLogs('game2048.transcript', level='INFO') as logs:
            display.report_tile(2, 3, 1)
            self.assertEqual(display.read_command(), 'Up')
        self.assertEqual([r.getMessage() for r in logs.records], ['2 3 1', 'Up'])

    def test_terminal_tells_win_from_loss(self):
        display = TerminalDisplay()
        with patch('game2048.terminal.clear_screen'), \
                patch('sys.stdout', new_callable=io.StringIO) as out:
            display.report_tile(2, 0, 0)
            display.report_merge(2, 4, 0, 1, 0, 0)
            display.report_game_end(won=True)
        self.assertIn("YOU WIN!", out.getvalue())
        self.assertNotIn("GAME OVER!", out.getvalue())
        self.assertEqual(display.tiles[0, 0], 4)

        display.clear_display()
        with patch('game2048.terminal.clear_screen'), \
                patch('sys.stdout', new_callable=io.StringIO) as out:
            display.report_game_end(won=False)
        self.assertIn("GAME OVER!", out.getvalue())
        self.assertNotIn("YOU WIN!", out.getvalue())


class TestMain(unittest.TestCase):

    def test_parse_config(self):
        self.assertEqual(parse_config([]), GameConfig())
        config = parse_config(['--seed', '5', '--log', '--testing', '--no-display'])
        self.assertEqual(config.seed, 5)
        self.assertTrue(config.log)
        self.assertTrue(config.testing)
        self.assertFalse(config.display)

    def test_bad_options(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as cm:
                parse_config(['--seed', 'abc'])
        self.assertNotEqual(cm.exception.code, 0)

    def test_testing_mode(self):
        script = "2 0 0\n2 0 1\nLeft\n2 3 3\nQuit\n"
        with patch('sys.stdin', io.StringIO(script)), \
                patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(main(['--testing', '--no-display']), 0)
        self.assertIn("Score: 4 Best: 4", out.getvalue())

    def test_script_ending_early_is_reported(self):
        script = "2 0 0\n2 0 1\nLeft\n"
        with patch('sys.stdin', io.StringIO(script)), \
                patch('sys.stdout', new_callable=io.StringIO), \
                patch('sys.stderr', new_callable=io.StringIO) as err:
            self.assertEqual(main(['--testing', '--no-display']), 1)
        self.assertEqual(err.getvalue(), "Error: Script ended while a tile was expected\n")

    def tearDown(self):
        logging.getLogger('game2048.transcript').handlers.clear()


if __name__ == "__main__":
    unittest.main()
