"""
Abstract base classes for game definitions.

This module defines the interface that all games must implement. The solver
only ever talks to a game through these queries; it never inspects a state's
internals.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Hashable, Sequence, Tuple


class Player(IntEnum):
    """Player identifiers. Games with more players use plain ints 2, 3, ..."""
    CHANCE = -1
    PLAYER_1 = 0
    PLAYER_2 = 1


@dataclass(frozen=True)
class Action:
    """An action that can be taken at a decision node."""
    id: int
    name: str


class GameState(ABC):
    """
    A node in the game tree.

    States are treated as immutable: `child` must return a new state and
    leave `self` untouched.
    """

    @abstractmethod
    def is_terminal(self) -> bool:
        """Whether the game is over."""
        pass

    @abstractmethod
    def current_player(self) -> int:
        """Player to act, or `Player.CHANCE` at chance nodes."""
        pass

    @abstractmethod
    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        """(action, probability) pairs at a chance node; probabilities sum to 1."""
        pass

    @abstractmethod
    def legal_actions(self) -> Sequence[Action]:
        """Legal actions at a decision node, in a fixed order."""
        pass

    @abstractmethod
    def child(self, action: Action) -> 'GameState':
        """State reached by taking `action`."""
        pass

    @abstractmethod
    def returns(self, player: int) -> float:
        """Payoff of `player` at a terminal state."""
        pass

    @abstractmethod
    def information_state_key(self) -> Hashable:
        """
        Key of the acting player's information state.

        Two histories belong to the same information state iff they have
        the same key.
        """
        pass

    def is_chance_node(self) -> bool:
        return self.current_player() == Player.CHANCE


class Game(ABC):
    """Abstract base class for extensive-form games."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the game."""
        pass

    @property
    @abstractmethod
    def num_players(self) -> int:
        """Number of players (excluding chance)."""
        pass

    @abstractmethod
    def initial_state(self) -> GameState:
        """Root of the game tree."""
        pass

    @property
    def players(self) -> Tuple[int, ...]:
        """Non-chance player ids, 0 .. num_players - 1."""
        return tuple(range(self.num_players))
