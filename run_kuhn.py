"""
Solve Kuhn Poker with tabular CFR+ and report the result.

- Alternating updates, regret matching+, linear averaging
- Known game value for Player 1: -1/18
"""

import logging
import sys
import time

from tabular_cfr.games.kuhn import KuhnPoker
from tabular_cfr.solvers.config import CFRConfig
from tabular_cfr.solvers.exploitability import expected_values
from tabular_cfr.solvers.tabular import TabularCFRSolver


def main(iterations: int = 2000, num_players: int = 2):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    print("=" * 70)
    print(f"{num_players}-Player Kuhn Poker Solver")
    print("=" * 70)

    game = KuhnPoker(num_players)
    solver = TabularCFRSolver(game, CFRConfig.cfr_plus(random_seed=0))
    print(f"  Infosets: {len(solver.nodes)}")

    print(f"\nRunning {iterations} iterations...")
    start = time.time()
    policy = solver.solve(iterations=iterations)
    elapsed = time.time() - start
    print(f"  Time: {elapsed:.2f}s ({iterations / elapsed:.0f} it/s)")

    solver.print_strategy()

    values = expected_values(game, policy.state_probabilities)
    print("\nResults:")
    for player, value in enumerate(values):
        print(f"  P{player+1} value: {value:+.4f}")
    if num_players == 2:
        print(f"  Nash value (P1): {-1/18:+.4f}")
    print(f"  NashConv: {solver.nash_conv():.6f}")
    print(f"  Exploitability: {solver.exploitability():.6f}")


if __name__ == "__main__":
    main(*(int(arg) for arg in sys.argv[1:3]))
