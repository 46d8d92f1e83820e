"""
Testing infrastructure.

This module provides reference comparisons against OpenSpiel and against
the known Kuhn poker equilibrium. It may import from any layer (test-only code).
"""

from tabular_cfr.testing.openspiel_compare import (
    is_openspiel_available,
    run_comparison,
    validate_against_known_nash,
)

__all__ = [
    'is_openspiel_available',
    'run_comparison',
    'validate_against_known_nash',
]
