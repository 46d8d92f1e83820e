"""
Recursive CFR tree walk.

One call to `cfr_traverse` performs one full-tree pass for one iteration:
it computes counterfactual values bottom-up and, at the information states
of the players being updated, accumulates regrets and strategy sums into
the node table. Nothing but the table passed in is mutated.

Symbols used below:

    reach:      player -> product of that player's action probabilities
                along the path (chance included under Player.CHANCE)
    pi_self:    acting player's own reach
    pi_opp:     product of everybody else's reach, chance included
    weight:     averaging weight of this iteration
    values:     per-player expected payoff of a state, before weighting by
                opponents' reach
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

import numpy as np

from tabular_cfr.engine.nodes import NodeTable
from tabular_cfr.errors import InconsistentInfoStateError, MissingNodeError
from tabular_cfr.games.base import GameState, Player


@dataclass(frozen=True)
class AllPlayers:
    """Simultaneous update: every player's info states are updated."""

    def includes(self, player: int) -> bool:
        return True


@dataclass(frozen=True)
class OnlyPlayer:
    """Alternating update: only `player`'s info states are updated."""
    player: int

    def includes(self, player: int) -> bool:
        return player == self.player


UpdateTarget = Union[AllPlayers, OnlyPlayer]

ALL_PLAYERS = AllPlayers()


def initial_reach(players: Sequence[int]) -> Dict[int, float]:
    """Reach probabilities at the root: 1 for every player and for chance."""
    reach = {player: 1.0 for player in players}
    reach[Player.CHANCE] = 1.0
    return reach


def cfr_traverse(
    nodes: NodeTable,
    state: GameState,
    players: Sequence[int],
    target: UpdateTarget,
    weight: float,
    reach: Optional[Dict[int, float]] = None
) -> np.ndarray:
    """
    Walk the subtree under `state` and update the nodes of `target`.

    Terminal payoffs are collected for every player, so the same return
    value serves both simultaneous and alternating updates: each info state
    reads off the component of its own acting player.

    Args:
        nodes: Node table, updated in place
        state: Root of the subtree to walk
        players: Non-chance player ids, 0 .. n-1
        target: Which players' info states to update
        weight: Weight applied to this iteration's strategy contribution
        reach: Reach probabilities of `state` (defaults to the root's)

    Returns:
        values: Array of shape (num_players,)

    Raises:
        MissingNodeError: `state` maps to an info state with no node
    """
    if reach is None:
        reach = initial_reach(players)

    if state.is_terminal():
        return np.array([state.returns(p) for p in players], dtype=np.float64)

    if state.is_chance_node():
        values = np.zeros(len(players))
        for action, prob in state.chance_outcomes():
            child_reach = dict(reach)
            child_reach[Player.CHANCE] *= prob
            values += prob * cfr_traverse(
                nodes, state.child(action), players, target, weight, child_reach
            )
        return values

    key = state.information_state_key()
    node = nodes.get(key)
    if node is None:
        raise MissingNodeError(key)

    actions = state.legal_actions()
    if len(actions) != node.num_actions:
        raise InconsistentInfoStateError(key, node.num_actions, len(actions))

    player = state.current_player()

    # action_values[i] = per-player values after taking action i
    action_values = np.empty((len(actions), len(players)))
    for i, action in enumerate(actions):
        child_reach = dict(reach)
        child_reach[player] *= node.strategy[i]
        action_values[i] = cfr_traverse(
            nodes, state.child(action), players, target, weight, child_reach
        )

    values = node.strategy @ action_values

    if target.includes(player):
        pi_self = reach[player]
        pi_opp = 1.0
        for other, prob in reach.items():
            if other != player:
                pi_opp *= prob

        node.cumulative_regret += pi_opp * (action_values[:, player] - values[player])
        node.cumulative_strategy += weight * pi_self * node.strategy

    return values
