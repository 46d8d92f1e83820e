"""
Exploitability of a policy profile.

A policy here is any callable mapping a decision state to a distribution
over its legal actions, e.g. `AveragePolicy.state_probabilities`.

NashConv is the total gain all players could make by each switching to a
best response; exploitability is NashConv divided by the number of players.
Both are 0 exactly at a Nash equilibrium.
"""

from collections import defaultdict
from typing import Callable, Dict, Hashable, List, Tuple

import numpy as np

from tabular_cfr.games.base import Game, GameState

PolicyFn = Callable[[GameState], np.ndarray]


def _policy_values(state: GameState, policy: PolicyFn, players) -> np.ndarray:
    if state.is_terminal():
        return np.array([state.returns(p) for p in players], dtype=np.float64)

    values = np.zeros(len(players))
    if state.is_chance_node():
        for action, prob in state.chance_outcomes():
            values += prob * _policy_values(state.child(action), policy, players)
        return values

    probs = policy(state)
    for action, prob in zip(state.legal_actions(), probs):
        if prob > 0:
            values += prob * _policy_values(state.child(action), policy, players)
    return values


def expected_values(game: Game, policy: PolicyFn) -> np.ndarray:
    """Expected payoff of every player when all of them follow `policy`."""
    return _policy_values(game.initial_state(), policy, game.players)


def best_response_value(game: Game, policy: PolicyFn, player: int) -> float:
    """
    Value of a best response for `player` against `policy`.

    Other players (and chance) act as given. At each of `player`'s info
    states the best response commits to the single action maximizing

        sum over histories h in the info state of
            pi_opp(h) * value(child(h, a))

    so it cannot condition on anything the info state hides.
    """
    # info state key -> [(history, opponents' and chance reach)]
    infosets: Dict[Hashable, List[Tuple[GameState, float]]] = defaultdict(list)

    def collect(state: GameState, reach: float) -> None:
        if state.is_terminal():
            return
        if state.is_chance_node():
            for action, prob in state.chance_outcomes():
                collect(state.child(action), reach * prob)
        elif state.current_player() == player:
            infosets[state.information_state_key()].append((state, reach))
            for action in state.legal_actions():
                collect(state.child(action), reach)
        else:
            for action, prob in zip(state.legal_actions(), policy(state)):
                collect(state.child(action), reach * prob)

    best_actions: Dict[Hashable, int] = {}

    def best_action(key: Hashable) -> int:
        if key not in best_actions:
            histories = infosets[key]
            totals = np.zeros(len(histories[0][0].legal_actions()))
            for history, reach in histories:
                if reach == 0:
                    continue
                for i, action in enumerate(history.legal_actions()):
                    totals[i] += reach * value(history.child(action))
            best_actions[key] = int(np.argmax(totals))
        return best_actions[key]

    def value(state: GameState) -> float:
        if state.is_terminal():
            return state.returns(player)
        if state.is_chance_node():
            return sum(
                prob * value(state.child(action))
                for action, prob in state.chance_outcomes()
            )
        actions = state.legal_actions()
        if state.current_player() == player:
            return value(state.child(actions[best_action(state.information_state_key())]))
        return sum(
            prob * value(state.child(action))
            for action, prob in zip(actions, policy(state))
            if prob > 0
        )

    root = game.initial_state()
    collect(root, 1.0)
    return float(value(root))


def nash_conv(game: Game, policy: PolicyFn) -> float:
    """Sum over players of best-response value minus on-policy value."""
    on_policy = expected_values(game, policy)
    return float(sum(
        best_response_value(game, policy, player) - on_policy[player]
        for player in game.players
    ))


def exploitability(game: Game, policy: PolicyFn) -> float:
    """
    Average per-player gain from deviating to a best response.

    For two-player zero-sum games this equals the mean of the two
    best-response values.
    """
    return nash_conv(game, policy) / game.num_players
