import numpy as np
import gymnasium as gym
from gymnasium import spaces

from game2048.direction import Side
from game2048.game import Game2048
from game2048.tiles import RandomTileSource

# Action index -> side, in the order up, down, left, right
ACTIONS = [Side.NORTH, Side.SOUTH, Side.WEST, Side.EAST]


class Game2048Env(gym.Env):
    metadata = {"render_modes": ["human"]}

    def __init__(self, render_mode=None):
        super().__init__()
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(ACTIONS))
        self.game = Game2048()
        self.observation_space = spaces.Box(low=0, high=1, shape=(self.game.squares,), dtype=np.float32)
        self.tiles = RandomTileSource(size=self.game.n)

        self.episode_moves = 0
        self.episode_invalid_moves = 0

        self.reward_weights = {
            'invalid_penalty': -5.0,
            'gameover_penalty': 0.0,
        }

    def set_reward_weights(self, **kwargs):
        self.reward_weights.update(kwargs)

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        # New tiles come from the env's seeded generator
        self.tiles.rng = self.np_random
        self.game.clear()
        self.game.place_random_tile(self.tiles)
        self.game.place_random_tile(self.tiles)
        self.episode_moves = 0
        self.episode_invalid_moves = 0
        return self._get_obs(), {}

    def step(self, action):
        side = ACTIONS[int(action)]
        score_before = self.game.score
        self.episode_moves += 1

        if not self.game.tilt(side):
            self.episode_invalid_moves += 1
            return self._get_obs(), self.reward_weights['invalid_penalty'], False, False, self._info(True)

        self.game.place_random_tile(self.tiles)
        reward = float(self.game.score - score_before)
        terminated = self.game.is_game_over()
        if terminated:
            reward += self.reward_weights['gameover_penalty']
        return self._get_obs(), reward, terminated, False, self._info(False)

    def _info(self, invalid: bool):
        return {
            "score": self.game.score,
            "max_tile": self.game.get_max_tile(),
            "state": self.game.state().value,
            "invalid_move": invalid,
            "episode_moves": self.episode_moves,
            "episode_invalid_moves": self.episode_invalid_moves,
            "action_mask": self.get_action_mask(),
        }

    def _get_obs(self):
        board = self.game.board
        with np.errstate(divide='ignore'):
            obs = np.where(board > 0, np.log2(board) / 11, 0)
        return np.clip(obs, 0, 1).flatten().astype(np.float32)

    def get_action_mask(self):
        # Float mask [up, down, left, right]
        return np.array([self.game.can_move(side) for side in ACTIONS], dtype=np.float32)

    def render(self):
        if self.render_mode == "human":
            print(self.game.board)
