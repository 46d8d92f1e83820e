"""
Playing policies derived from a solved node table.

`AveragePolicy` is a pure lookup from info-state key to action distribution.
`SamplingPolicy` draws actions from any such lookup with an injected
random generator, so sampling is reproducible per solver instance.
"""

from typing import Callable, Dict, Hashable, Iterator, Optional, Tuple

import numpy as np

from tabular_cfr.engine.ops import uniform_strategy
from tabular_cfr.errors import InconsistentInfoStateError
from tabular_cfr.games.base import Action, GameState


class AveragePolicy:
    """Finalized action distributions; unknown keys play uniformly."""

    def __init__(self, distributions: Optional[Dict[Hashable, np.ndarray]] = None):
        self._distributions: Dict[Hashable, np.ndarray] = {}
        for key, probs in (distributions or {}).items():
            self.install(key, probs)

    def __len__(self) -> int:
        return len(self._distributions)

    def __contains__(self, key) -> bool:
        return key in self._distributions

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._distributions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AveragePolicy):
            return NotImplemented
        return (
            self._distributions.keys() == other._distributions.keys()
            and all(
                np.array_equal(probs, other._distributions[key])
                for key, probs in self._distributions.items()
            )
        )

    def install(self, key: Hashable, probs: np.ndarray) -> None:
        self._distributions[key] = np.array(probs, dtype=np.float64)

    def action_probabilities(self, key: Hashable, num_actions: int) -> np.ndarray:
        """Distribution over `num_actions` actions at info state `key`."""
        probs = self._distributions.get(key)
        if probs is None:
            return uniform_strategy(num_actions)
        if len(probs) != num_actions:
            raise InconsistentInfoStateError(key, len(probs), num_actions)
        return probs.copy()

    def state_probabilities(self, state: GameState) -> np.ndarray:
        """Distribution over `state.legal_actions()`."""
        return self.action_probabilities(
            state.information_state_key(), len(state.legal_actions())
        )

    def to_dict(self) -> Dict[Hashable, np.ndarray]:
        return {key: probs.copy() for key, probs in self._distributions.items()}


class SamplingPolicy:
    """Samples actions from a state -> distribution lookup."""

    def __init__(
        self,
        lookup: Callable[[GameState], np.ndarray],
        rng: np.random.Generator
    ):
        self.lookup = lookup
        self.rng = rng

    def __call__(self, state: GameState) -> Action:
        action, _ = self.sample(state)
        return action

    def sample(self, state: GameState) -> Tuple[Action, float]:
        """Draw a legal action; returns it with its probability."""
        actions = state.legal_actions()
        probs = self.lookup(state)
        i = self.rng.choice(len(actions), p=probs)
        return actions[i], float(probs[i])
