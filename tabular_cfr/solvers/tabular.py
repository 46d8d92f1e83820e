"""
Tabular CFR solver.

Owns the node table and drives CFR iterations over a game. The variant is
selected by CFRConfig:

1. Alternating vs. simultaneous updates
2. Regret matching vs. regret matching+ (negative regrets floored at 0)
3. Uniform vs. linear (optionally delayed) strategy averaging

With the defaults this is CFR+; `CFRConfig.vanilla()` gives plain CFR.

References:
- Zinkevich et al., "Regret Minimization in Games with Incomplete Information"
- Tammelin et al., "Solving Large Imperfect Information Games Using CFR+"
- Burch et al., "Revisiting CFR+ and Alternating Updates"
"""

import dataclasses
import logging
from types import MappingProxyType
from typing import Dict, Hashable, Mapping, Optional, Tuple

import numpy as np

from tabular_cfr.engine.nodes import InfoStateNode, init_info_state_nodes, walk
from tabular_cfr.engine.ops import regret_match_nodes
from tabular_cfr.engine.traversal import ALL_PLAYERS, OnlyPlayer, cfr_traverse
from tabular_cfr.errors import CheckpointError, MissingNodeError
from tabular_cfr.games.base import Action, Game, GameState
from tabular_cfr.solvers.checkpoint import load_nodes, save_nodes
from tabular_cfr.solvers.config import CFRConfig
from tabular_cfr.solvers.exploitability import exploitability, nash_conv
from tabular_cfr.solvers.policy import AveragePolicy, SamplingPolicy

logger = logging.getLogger(__name__)


class TabularCFRSolver:
    """
    CFR solver storing one InfoStateNode per information state.

    The node table is built by walking the whole game tree once at
    construction; iterations never add or resize nodes.

    Usage:
        solver = TabularCFRSolver(KuhnPoker(), alternating_update=False)
        solver.solve(iterations=1000)
        probs = solver.action_distribution(state)
    """

    def __init__(self, game: Game, config: Optional[CFRConfig] = None, **overrides):
        """
        Initialize the solver.

        Args:
            game: Game to solve
            config: Solver options (defaults to CFRConfig())
            **overrides: CFRConfig fields replacing those of `config`
        """
        if config is None:
            config = CFRConfig(**overrides)
        elif overrides:
            config = dataclasses.replace(config, **overrides)

        self.game = game
        self.config = config

        self._nodes = init_info_state_nodes(game, config.key_type)

        # Only action sampling consumes randomness; traversal is deterministic
        self.rng = np.random.default_rng(config.random_seed)
        self.average_policy = AveragePolicy()
        self.sampling_policy = SamplingPolicy(self.action_distribution, self.rng)

        # Number of completed iterations
        self.iterations = 0

        logger.info(
            "Initialized %s with %d info-state nodes (%s)",
            game.name, len(self._nodes), config
        )

    @property
    def nodes(self) -> Mapping[Hashable, InfoStateNode]:
        """Read-only view of the node table."""
        return MappingProxyType(self._nodes)

    def run_iteration(self) -> None:
        """
        Run a single CFR iteration.

        Alternating: one traversal per player, each followed by regret
        matching, so later players respond to the refreshed strategies.
        Simultaneous: one traversal updating everybody, then regret matching.
        """
        iteration = self.iterations + 1
        weight = self.config.iteration_weight(iteration)
        players = self.game.players
        root = self.game.initial_state()
        reset_negative = self.config.reset_negative_regrets

        logger.debug("Iteration %d (weight %d)", iteration, weight)

        if self.config.alternating_update:
            for player in players:
                cfr_traverse(self._nodes, root, players, OnlyPlayer(player), weight)
                regret_match_nodes(self._nodes, reset_negative)
        else:
            cfr_traverse(self._nodes, root, players, ALL_PLAYERS, weight)
            regret_match_nodes(self._nodes, reset_negative)

        self.iterations = iteration

    def iterate(self, num_iterations: int = 1) -> None:
        """
        Run CFR iterations.

        Args:
            num_iterations: Number of iterations to run
        """
        if num_iterations < 0:
            raise ValueError(f"num_iterations must be non-negative, got {num_iterations}")
        for _ in range(num_iterations):
            self.run_iteration()

    def solve(self, iterations: int = 1000) -> AveragePolicy:
        """
        Solve the game by running CFR iterations.

        Args:
            iterations: Number of iterations to run

        Returns:
            The finalized average policy
        """
        self.iterate(iterations)
        return self.finalize()

    def finalize(self) -> AveragePolicy:
        """
        Rebuild the average policy from the cumulative strategies.

        Nodes whose cumulative strategy is still zero are left out and play
        uniformly when queried. Calling this twice in a row gives equal
        policies.
        """
        policy = AveragePolicy()
        for key, node in self._nodes.items():
            total = node.cumulative_strategy.sum()
            if total > 0:
                policy.install(key, node.cumulative_strategy / total)
        self.average_policy = policy

        logger.info(
            "Finalized average policy after %d iterations: %d of %d info states "
            "accumulated, rest uniform",
            self.iterations, len(policy), len(self._nodes)
        )
        return policy

    def action_distribution(self, state: GameState) -> np.ndarray:
        """Average-policy distribution over `state.legal_actions()`."""
        return self.average_policy.state_probabilities(state)

    def sample_action(self, state: GameState) -> Action:
        """Draw an action at `state` from the average policy."""
        return self.sampling_policy(state)

    def current_strategy(self, key: Hashable) -> np.ndarray:
        """Current (regret-matched) strategy at info state `key`."""
        node = self._nodes.get(key)
        if node is None:
            raise MissingNodeError(key)
        return node.strategy.copy()

    def exploitability(self) -> float:
        """Exploitability of the average policy (finalizes it first)."""
        return exploitability(self.game, self.finalize().state_probabilities)

    def nash_conv(self) -> float:
        """NashConv of the average policy (finalizes it first)."""
        return nash_conv(self.game, self.finalize().state_probabilities)

    def save(self, path) -> None:
        """Write the node table and iteration count to `path` (.npz)."""
        save_nodes(path, self._nodes, self.iterations)

    def restore(self, path) -> None:
        """
        Load a table written by `save` for the same game.

        Raises:
            CheckpointError: the saved table has different keys or vector
                lengths than this game's table
        """
        nodes, iterations = load_nodes(path)

        if nodes.keys() != self._nodes.keys():
            missing = len(self._nodes.keys() - nodes.keys())
            extra = len(nodes.keys() - self._nodes.keys())
            raise CheckpointError(
                f"{path} does not match {self.game.name}: "
                f"{missing} info states missing, {extra} unexpected"
            )
        for key, node in nodes.items():
            if node.num_actions != self._nodes[key].num_actions:
                raise CheckpointError(
                    f"{path}: info state {key!r} has {node.num_actions} actions, "
                    f"expected {self._nodes[key].num_actions}"
                )

        self._nodes.update(nodes)
        self.iterations = iterations
        self.average_policy = AveragePolicy()

    def _describe_info_states(self) -> Dict[Hashable, Tuple[int, Tuple[str, ...]]]:
        """Acting player and action names of every info state."""
        described = {}

        def visit(state: GameState) -> None:
            if state.is_terminal() or state.is_chance_node():
                return
            key = state.information_state_key()
            if key not in described:
                described[key] = (
                    int(state.current_player()),
                    tuple(a.name for a in state.legal_actions()),
                )

        walk(self.game.initial_state(), visit)
        return described

    def print_strategy(self) -> None:
        """Print the average strategy for all infosets."""
        policy = self.finalize()

        print(f"\nAverage Strategy after {self.iterations} iterations:")
        print("-" * 50)

        for key, (player, names) in self._describe_info_states().items():
            probs = policy.action_probabilities(key, len(names))
            action_strs = [f"{name}={prob:.3f}" for name, prob in zip(names, probs)]
            print(f"P{player+1} [{key}]: {', '.join(action_strs)}")
