"""
Kuhn Poker implementation.

Kuhn Poker is a simplified poker game:
- Deck of num_players + 1 cards: Jack (J=0), Queen (Q=1), King (K=2), Ace (A=3)
- Each player antes 1 chip
- Each player is dealt one card
- Player 1 acts first: Check or Bet
- Once someone bets, every other player in turn may Fold or Call
- Highest card among the players still in wins the pot

The two-player game has 12 infosets and a game value of -1/18 for Player 1.
"""

from itertools import permutations
from typing import Optional, Sequence, Tuple

from .base import Action, Game, GameState, Player


# Card values
JACK = 0
QUEEN = 1
KING = 2
ACE = 3
CARD_NAMES = {JACK: 'J', QUEEN: 'Q', KING: 'K', ACE: 'A'}

# Actions
CHECK = Action(id=0, name='c')  # Check / Pass
BET = Action(id=1, name='b')    # Bet 1 chip
FOLD = Action(id=0, name='f')   # Fold (same id as check - context dependent)
CALL = Action(id=1, name='c')   # Call (same id as bet - context dependent)


class KuhnState(GameState):
    """A Kuhn Poker history: the dealt cards and the betting so far."""

    def __init__(
        self,
        num_players: int,
        cards: Tuple[int, ...] = (),
        actions: Tuple[Action, ...] = ()
    ):
        self.num_players = num_players
        self.cards = cards
        self.actions = actions

    def __repr__(self) -> str:
        dealt = ''.join(CARD_NAMES[c] for c in self.cards)
        return f"KuhnState({dealt or '-'}:{','.join(a.name for a in self.actions)})"

    def _bettor(self) -> Optional[int]:
        """Position (and player) of the first bet, if any."""
        for position, action in enumerate(self.actions):
            if action.id == BET.id:
                return position
        return None

    def is_terminal(self) -> bool:
        if not self.cards:
            return False
        bettor = self._bettor()
        if bettor is None:
            return len(self.actions) == self.num_players
        return len(self.actions) == self.num_players + bettor

    def current_player(self) -> int:
        if not self.cards:
            return Player.CHANCE
        return len(self.actions) % self.num_players

    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        deals = list(permutations(range(self.num_players + 1), self.num_players))
        prob = 1.0 / len(deals)
        return [
            (Action(id=i, name=''.join(CARD_NAMES[c] for c in deal)), prob)
            for i, deal in enumerate(deals)
        ]

    def legal_actions(self) -> Sequence[Action]:
        if self.is_terminal():
            return ()
        if self._bettor() is None:
            return (CHECK, BET)
        return (FOLD, CALL)

    def child(self, action: Action) -> 'KuhnState':
        if not self.cards:
            deals = list(permutations(range(self.num_players + 1), self.num_players))
            return KuhnState(self.num_players, deals[action.id], ())
        return KuhnState(self.num_players, self.cards, self.actions + (action,))

    def _contributions(self) -> Tuple[int, ...]:
        contrib = [1] * self.num_players
        for position, action in enumerate(self.actions):
            contrib[position % self.num_players] += action.id
        return tuple(contrib)

    def returns(self, player: int) -> float:
        """
        Net chips won or lost by `player`.

        Without a bet everybody shows down; after a bet only the bettor
        and the callers do.
        """
        contrib = self._contributions()
        if self._bettor() is None:
            contenders = range(self.num_players)
        else:
            contenders = [p for p in range(self.num_players) if contrib[p] == 2]
        winner = max(contenders, key=lambda p: self.cards[p])
        if player == winner:
            return float(sum(contrib) - contrib[player])
        return float(-contrib[player])

    def information_state_key(self) -> str:
        """
        Player knows: their own card + action history
        Player doesn't know: opponents' cards
        """
        my_card = self.cards[self.current_player()]
        return f"{CARD_NAMES[my_card]}:{','.join(a.name for a in self.actions)}"


class KuhnPoker(Game):
    """Kuhn Poker game implementation (2 or 3 players)."""

    def __init__(self, num_players: int = 2):
        if num_players not in (2, 3):
            raise ValueError(f"Kuhn Poker supports 2 or 3 players, got {num_players}")
        self._num_players = num_players

    @property
    def name(self) -> str:
        return "kuhn_poker"

    @property
    def num_players(self) -> int:
        return self._num_players

    def initial_state(self) -> KuhnState:
        return KuhnState(self._num_players)
