"""
Solver configuration.

Fixed at construction time; the solver never mutates it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CFRConfig:
    """
    Options selecting the CFR variant.

    Attributes:
        alternating_update: Update one player per traversal, cycling through
            players, instead of all players in one pass
        reset_negative_regrets: Floor cumulative regrets at 0 (regret matching+)
        linear_averaging: Weight iteration t by max(t - averaging_delay, 0)
            instead of 1 when accumulating the average strategy
        averaging_delay: Iterations discarded from the linear average.
            Has no effect unless `linear_averaging` is set.
        key_type: Type of the games' info-state keys
        random_seed: Seed of the generator used for action sampling
    """
    alternating_update: bool = True
    reset_negative_regrets: bool = True
    linear_averaging: bool = True
    averaging_delay: int = 0
    key_type: type = str
    random_seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.averaging_delay, bool) or not isinstance(self.averaging_delay, int):
            raise ValueError(
                f"averaging_delay must be an int, got {self.averaging_delay!r}"
            )
        if self.averaging_delay < 0:
            raise ValueError(
                f"averaging_delay must be non-negative, got {self.averaging_delay}"
            )
        if not isinstance(self.key_type, type):
            raise TypeError(f"key_type must be a type, got {self.key_type!r}")
        if self.averaging_delay and not self.linear_averaging:
            logger.warning(
                "averaging_delay=%d has no effect without linear_averaging",
                self.averaging_delay
            )

    @classmethod
    def vanilla(cls, **kwargs) -> 'CFRConfig':
        """Plain CFR: simultaneous updates, no regret flooring, uniform averaging."""
        options = dict(
            alternating_update=False,
            reset_negative_regrets=False,
            linear_averaging=False,
        )
        options.update(kwargs)
        return cls(**options)

    @classmethod
    def cfr_plus(cls, **kwargs) -> 'CFRConfig':
        """CFR+: alternating updates, regret flooring, linear averaging."""
        options = dict(
            alternating_update=True,
            reset_negative_regrets=True,
            linear_averaging=True,
        )
        options.update(kwargs)
        return cls(**options)

    def iteration_weight(self, iteration: int) -> int:
        """Averaging weight of the 1-based `iteration`."""
        if self.linear_averaging:
            return max(iteration - self.averaging_delay, 0)
        return 1
