"""
Tabular CFR Solver

A tree-walking implementation of Counterfactual Regret Minimization for
extensive-form games with two or more players, supporting vanilla CFR,
CFR+, alternating updates and linear averaging.
"""

__version__ = "0.1.0"

from tabular_cfr.solvers import CFRConfig, TabularCFRSolver

__all__ = ['CFRConfig', 'TabularCFRSolver']
