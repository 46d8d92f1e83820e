"""
Regret matching.

Turns a cumulative-regret vector into a strategy proportional to its
positive part. In regret-matching+ mode negative cumulative regrets are
floored at 0 in place before they are read.
"""

import numpy as np

from tabular_cfr.engine.nodes import InfoStateNode, NodeTable


def uniform_strategy(num_actions: int) -> np.ndarray:
    """Equal probability for every action."""
    return np.full(num_actions, 1.0 / num_actions)


def regret_match(
    cumulative_regret: np.ndarray,
    reset_negative: bool = False
) -> np.ndarray:
    """
    Convert cumulative regrets to a strategy via regret matching.

        positive_regrets = max(0, regrets)
        if sum(positive_regrets) > 0:
            strategy = positive_regrets / sum(positive_regrets)
        else:
            strategy = uniform over actions

    Args:
        cumulative_regret: Array of shape (num_actions,). Modified in place
            when `reset_negative` is set.
        reset_negative: Floor negative regrets at 0 first (CFR+)

    Returns:
        strategy: Array of shape (num_actions,) - valid probability distribution
    """
    if reset_negative:
        np.maximum(cumulative_regret, 0.0, out=cumulative_regret)

    positive_regrets = np.maximum(cumulative_regret, 0.0)
    regret_sum = positive_regrets.sum()

    if regret_sum > 0:
        return positive_regrets / regret_sum
    return uniform_strategy(len(cumulative_regret))


def regret_match_node(node: InfoStateNode, reset_negative: bool = False) -> None:
    """Refresh a node's current strategy from its cumulative regret."""
    node.strategy[:] = regret_match(node.cumulative_regret, reset_negative)


def regret_match_nodes(nodes: NodeTable, reset_negative: bool = False) -> None:
    """Refresh the strategy of every node in the table."""
    for node in nodes.values():
        regret_match_node(node, reset_negative)
