"""
Rock-Paper-Scissors as an extensive-form game.

The simultaneous move is modeled sequentially: Player 1 picks first and
Player 2 picks without observing that choice, so each player has exactly
one information set. Payoffs are +1 / 0 / -1 cyclic.
"""

from typing import Sequence, Tuple

from .base import Action, Game, GameState


ROCK = Action(id=0, name='R')
PAPER = Action(id=1, name='P')
SCISSORS = Action(id=2, name='S')
ACTIONS = (ROCK, PAPER, SCISSORS)


class RockPaperScissorsState(GameState):

    def __init__(self, choices: Tuple[Action, ...] = ()):
        self.choices = choices

    def __repr__(self) -> str:
        return f"RockPaperScissorsState({''.join(a.name for a in self.choices)})"

    def is_terminal(self) -> bool:
        return len(self.choices) == 2

    def current_player(self) -> int:
        return len(self.choices)

    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        return ()

    def legal_actions(self) -> Sequence[Action]:
        return () if self.is_terminal() else ACTIONS

    def child(self, action: Action) -> 'RockPaperScissorsState':
        return RockPaperScissorsState(self.choices + (action,))

    def returns(self, player: int) -> float:
        mine = self.choices[player].id
        theirs = self.choices[1 - player].id
        # Each action beats the one before it, cyclically
        if mine == theirs:
            return 0.0
        return 1.0 if (mine - theirs) % 3 == 1 else -1.0

    def information_state_key(self) -> str:
        # Player 2 does not see Player 1's choice
        return f"P{len(self.choices) + 1}"


class RockPaperScissors(Game):

    @property
    def name(self) -> str:
        return "rock_paper_scissors"

    @property
    def num_players(self) -> int:
        return 2

    def initial_state(self) -> RockPaperScissorsState:
        return RockPaperScissorsState()
