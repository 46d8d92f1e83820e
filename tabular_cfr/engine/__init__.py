"""
Compute engine layer (Layer 2).

This layer provides the node table, regret matching and the CFR tree walk.
It may only import from: tabular_cfr.games, tabular_cfr.errors
"""

from tabular_cfr.engine.nodes import (
    InfoStateNode,
    NodeTable,
    init_info_state_nodes,
    walk,
)

from tabular_cfr.engine.ops import (
    regret_match,
    regret_match_node,
    regret_match_nodes,
    uniform_strategy,
)

from tabular_cfr.engine.traversal import (
    ALL_PLAYERS,
    AllPlayers,
    OnlyPlayer,
    UpdateTarget,
    cfr_traverse,
    initial_reach,
)

__all__ = [
    'InfoStateNode',
    'NodeTable',
    'init_info_state_nodes',
    'walk',
    'regret_match',
    'regret_match_node',
    'regret_match_nodes',
    'uniform_strategy',
    'ALL_PLAYERS',
    'AllPlayers',
    'OnlyPlayer',
    'UpdateTarget',
    'cfr_traverse',
    'initial_reach',
]
