import unittest

import numpy as np

from game2048.gym_env import Game2048Env


class TestGame2048Env(unittest.TestCase):

    def setUp(self):
        self.env = Game2048Env()

    def test_reset(self):
        obs, info = self.env.reset(seed=3)
        self.assertEqual(obs.shape, (16,))
        self.assertEqual(obs.dtype, np.float32)
        self.assertEqual(self.env.game.count, 2)
        self.assertTrue(self.env.observation_space.contains(obs))

    def test_seeded_resets_match(self):
        other = Game2048Env()
        obs_a, _ = self.env.reset(seed=11)
        obs_b, _ = other.reset(seed=11)
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_valid_step(self):
        self.env.reset(seed=0)
        self.env.game.load([[2, 2, 0, 0]] + [[0] * 4] * 3)
        obs, reward, terminated, truncated, info = self.env.step(2)  # left
        self.assertEqual(reward, 4.0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertFalse(info["invalid_move"])
        self.assertEqual(self.env.game.board[0, 0], 4)
        self.assertEqual(self.env.game.count, 2)

    def test_reward_weights(self):
        self.env.set_reward_weights(invalid_penalty=-1.0)
        self.env.reset(seed=0)
        self.env.game.load([[2, 0, 0, 0]] + [[0] * 4] * 3)
        _, reward, _, _, _ = self.env.step(0)  # up
        self.assertEqual(reward, -1.0)

    def test_invalid_step(self):
        self.env.reset(seed=0)
        self.env.game.load([[2, 0, 0, 0]] + [[0] * 4] * 3)
        obs, reward, terminated, truncated, info = self.env.step(0)  # up
        self.assertEqual(reward, self.env.reward_weights['invalid_penalty'])
        self.assertTrue(info["invalid_move"])
        self.assertEqual(self.env.game.count, 1)

    def test_action_mask(self):
        self.env.reset(seed=0)
        self.env.game.load([[2, 0, 0, 0]] + [[0] * 4] * 3)
        np.testing.assert_array_equal(self.env.get_action_mask(), [0.0, 1.0, 0.0, 1.0])


if __name__ == "__main__":
    unittest.main()
