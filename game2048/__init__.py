from game2048.direction import InvalidDirection, Side
from game2048.game import Game2048, GameState

__all__ = ["Game2048", "GameState", "InvalidDirection", "Side"]
