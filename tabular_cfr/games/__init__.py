"""
Game definitions layer (Layer 1 - lowest).

This layer defines the game-tree interface the solver consumes and a few
reference games. It must not import from any other layer.
"""

from tabular_cfr.games.base import Action, Game, GameState, Player
from tabular_cfr.games.kuhn import KuhnPoker
from tabular_cfr.games.rock_paper_scissors import RockPaperScissors

__all__ = [
    'Action',
    'Game',
    'GameState',
    'Player',
    'KuhnPoker',
    'RockPaperScissors',
]
