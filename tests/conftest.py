"""
Small hand-checkable games shared by the tests.
"""

from typing import Sequence, Tuple

import pytest

from tabular_cfr.games.base import Action, Game, GameState, Player


GO = Action(0, 'go')
LEFT = Action(0, 'L')
RIGHT = Action(1, 'R')
MIDDLE = Action(2, 'M')


class ForcedMoveState(GameState):
    """
    Player 1 has a single action, then Player 2 picks L (+1 for P2) or R (-1).
    """

    def __init__(self, history: Tuple[Action, ...] = ()):
        self.history = history

    def is_terminal(self) -> bool:
        return len(self.history) == 2

    def current_player(self) -> int:
        return len(self.history)

    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        return ()

    def legal_actions(self) -> Sequence[Action]:
        if self.is_terminal():
            return ()
        return (GO,) if not self.history else (LEFT, RIGHT)

    def child(self, action: Action) -> 'ForcedMoveState':
        return ForcedMoveState(self.history + (action,))

    def returns(self, player: int) -> float:
        p2_payoff = 1.0 if self.history[1] == LEFT else -1.0
        return p2_payoff if player == Player.PLAYER_2 else -p2_payoff

    def information_state_key(self) -> str:
        return ''.join(a.name for a in self.history) or 'root'


class ForcedMoveGame(Game):

    @property
    def name(self) -> str:
        return "forced_move"

    @property
    def num_players(self) -> int:
        return 2

    def initial_state(self) -> ForcedMoveState:
        return ForcedMoveState()


class InconsistentState(GameState):
    """Chance picks a branch; both branches share one key but not the action count."""

    def __init__(self, branch=None, done=False):
        self.branch = branch
        self.done = done

    def is_terminal(self) -> bool:
        return self.done

    def current_player(self) -> int:
        return Player.CHANCE if self.branch is None else Player.PLAYER_1

    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        return [(Action(0, 'two'), 0.5), (Action(1, 'three'), 0.5)]

    def legal_actions(self) -> Sequence[Action]:
        return (LEFT, RIGHT) if self.branch == 0 else (LEFT, RIGHT, MIDDLE)

    def child(self, action: Action) -> 'InconsistentState':
        if self.branch is None:
            return InconsistentState(branch=action.id)
        return InconsistentState(branch=self.branch, done=True)

    def returns(self, player: int) -> float:
        return 0.0

    def information_state_key(self) -> str:
        return "same"


class InconsistentGame(Game):

    @property
    def name(self) -> str:
        return "inconsistent"

    @property
    def num_players(self) -> int:
        return 1

    def initial_state(self) -> InconsistentState:
        return InconsistentState()


@pytest.fixture
def forced_move_game():
    return ForcedMoveGame()


@pytest.fixture
def inconsistent_game():
    return InconsistentGame()
