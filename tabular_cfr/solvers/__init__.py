"""
CFR solver layer (Layer 3).

This layer implements the tabular CFR solver, its configuration, the
policies it produces and their evaluation.
It may import from: tabular_cfr.games, tabular_cfr.engine, tabular_cfr.errors
"""

from tabular_cfr.solvers.config import CFRConfig
from tabular_cfr.solvers.exploitability import (
    best_response_value,
    expected_values,
    exploitability,
    nash_conv,
)
from tabular_cfr.solvers.policy import AveragePolicy, SamplingPolicy
from tabular_cfr.solvers.tabular import TabularCFRSolver

__all__ = [
    'CFRConfig',
    'AveragePolicy',
    'SamplingPolicy',
    'TabularCFRSolver',
    'best_response_value',
    'expected_values',
    'exploitability',
    'nash_conv',
]
