"""
Per-information-state statistics and the node table.

The table maps an info-state key to an InfoStateNode. It is built once by a
full depth-first walk of the game tree; CFR iterations update the nodes in
place but never add, remove or resize them.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable

import numpy as np

from tabular_cfr.errors import InconsistentInfoStateError, InfoStateKeyTypeError
from tabular_cfr.games.base import Game, GameState

logger = logging.getLogger(__name__)


@dataclass
class InfoStateNode:
    """
    Learned statistics for one information state.

    All three vectors have one entry per legal action, in the order the
    game reports its legal actions.
    """
    strategy: np.ndarray
    cumulative_regret: np.ndarray
    cumulative_strategy: np.ndarray

    @classmethod
    def uniform(cls, num_actions: int) -> 'InfoStateNode':
        """Fresh node: uniform strategy, zero regret, zero strategy sum."""
        if num_actions < 1:
            raise ValueError(f"num_actions must be positive, got {num_actions}")
        return cls(
            strategy=np.full(num_actions, 1.0 / num_actions),
            cumulative_regret=np.zeros(num_actions),
            cumulative_strategy=np.zeros(num_actions),
        )

    @property
    def num_actions(self) -> int:
        return len(self.strategy)

    def copy(self) -> 'InfoStateNode':
        return InfoStateNode(
            strategy=self.strategy.copy(),
            cumulative_regret=self.cumulative_regret.copy(),
            cumulative_strategy=self.cumulative_strategy.copy(),
        )


NodeTable = Dict[Hashable, InfoStateNode]


def walk(state: GameState, visit: Callable[[GameState], None]) -> None:
    """Call `visit` on every state of the tree rooted at `state`, depth first."""
    visit(state)
    if state.is_terminal():
        return
    if state.is_chance_node():
        for action, _ in state.chance_outcomes():
            walk(state.child(action), visit)
    else:
        for action in state.legal_actions():
            walk(state.child(action), visit)


def init_info_state_nodes(game: Game, key_type: type = str) -> NodeTable:
    """
    Build the node table for `game`.

    Every non-terminal, non-chance state gets a node keyed by its info-state
    key (get-or-insert: the first history to reach a key sizes its node).

    Raises:
        InfoStateKeyTypeError: a key is not an instance of `key_type`
        InconsistentInfoStateError: histories sharing a key disagree on the
            number of legal actions
    """
    nodes: NodeTable = {}
    num_states = 0

    def visit(state: GameState) -> None:
        nonlocal num_states
        num_states += 1
        if state.is_terminal() or state.is_chance_node():
            return

        key = state.information_state_key()
        if not isinstance(key, key_type):
            raise InfoStateKeyTypeError(key, key_type)

        num_actions = len(state.legal_actions())
        node = nodes.get(key)
        if node is None:
            nodes[key] = InfoStateNode.uniform(num_actions)
        elif node.num_actions != num_actions:
            raise InconsistentInfoStateError(key, node.num_actions, num_actions)

    walk(game.initial_state(), visit)

    logger.debug(
        "Walked %d states of %s: %d info-state nodes",
        num_states, game.name, len(nodes)
    )
    return nodes
