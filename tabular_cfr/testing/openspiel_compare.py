"""
OpenSpiel comparison utilities.

Validates our CFR implementation against OpenSpiel's reference implementation.
OpenSpiel games are wrapped in our GameState interface, so both solvers run
on the very same tree and their average strategies can be compared key by key.
"""

from typing import Dict, List, Sequence, Tuple

import numpy as np

from tabular_cfr.engine.nodes import walk
from tabular_cfr.games.base import Action, Game, GameState, Player
from tabular_cfr.solvers.config import CFRConfig
from tabular_cfr.solvers.tabular import TabularCFRSolver

# OpenSpiel is optional
try:
    import pyspiel
    from open_spiel.python.algorithms import cfr
    OPENSPIEL_AVAILABLE = True
except ImportError:
    OPENSPIEL_AVAILABLE = False
    pyspiel = None
    cfr = None


def is_openspiel_available() -> bool:
    """Check if OpenSpiel is available."""
    return OPENSPIEL_AVAILABLE


def _require_openspiel() -> None:
    if not OPENSPIEL_AVAILABLE:
        raise ImportError("OpenSpiel not available. Install with: pip install open_spiel")


class OpenSpielState(GameState):
    """GameState view of a pyspiel state."""

    def __init__(self, state):
        self.state = state

    def __repr__(self) -> str:
        return f"OpenSpielState({self.state.history()})"

    def _action(self, action_id: int) -> Action:
        return Action(action_id, self.state.action_to_string(self.state.current_player(), action_id))

    def is_terminal(self) -> bool:
        return self.state.is_terminal()

    def current_player(self) -> int:
        if self.state.is_chance_node():
            return Player.CHANCE
        return self.state.current_player()

    def chance_outcomes(self) -> Sequence[Tuple[Action, float]]:
        return [(self._action(a), p) for a, p in self.state.chance_outcomes()]

    def legal_actions(self) -> Sequence[Action]:
        return [self._action(a) for a in self.state.legal_actions()]

    def child(self, action: Action) -> 'OpenSpielState':
        return OpenSpielState(self.state.child(action.id))

    def returns(self, player: int) -> float:
        return self.state.returns()[player]

    def information_state_key(self) -> str:
        return self.state.information_state_string()


class OpenSpielGame(Game):
    """Game view of a pyspiel game, e.g. OpenSpielGame("kuhn_poker")."""

    def __init__(self, game_name: str):
        _require_openspiel()
        self.game = pyspiel.load_game(game_name)

    @property
    def name(self) -> str:
        return self.game.get_type().short_name

    @property
    def num_players(self) -> int:
        return self.game.num_players()

    def initial_state(self) -> OpenSpielState:
        return OpenSpielState(self.game.new_initial_state())


def run_openspiel_cfr(game_name: str = "kuhn_poker", iterations: int = 1000) -> Dict[str, np.ndarray]:
    """
    Run OpenSpiel CFR on a game.

    Args:
        game_name: OpenSpiel game name
        iterations: Number of CFR iterations

    Returns:
        Dictionary mapping infoset string to strategy array over all
        distinct actions (zero for illegal ones)
    """
    _require_openspiel()

    game = pyspiel.load_game(game_name)
    cfr_solver = cfr.CFRSolver(game)

    for _ in range(iterations):
        cfr_solver.evaluate_and_update_policy()

    average_policy = cfr_solver.average_policy()
    return {
        state_string: average_policy.action_probability_array[index].copy()
        for state_string, index in average_policy.state_lookup.items()
    }


def _legal_action_ids(game: Game) -> Dict[str, List[int]]:
    """Legal action ids of every info state of `game`."""
    legal = {}

    def visit(state: GameState) -> None:
        if not state.is_terminal() and not state.is_chance_node():
            legal.setdefault(state.information_state_key(), [a.id for a in state.legal_actions()])

    walk(game.initial_state(), visit)
    return legal


def compare_strategies(
    solver: TabularCFRSolver,
    openspiel_strategy: Dict[str, np.ndarray],
) -> Tuple[float, List[str]]:
    """
    Compare our average strategy with OpenSpiel's, info state by info state.

    Args:
        solver: Our solver, run on an OpenSpielGame
        openspiel_strategy: Output of run_openspiel_cfr on the same game

    Returns:
        (max_diff, report_lines): Largest absolute probability difference
        and one report line per info state
    """
    policy = solver.finalize()
    max_diff = 0.0
    report_lines = []

    for key, action_ids in sorted(_legal_action_ids(solver.game).items()):
        ours = policy.action_probabilities(key, len(action_ids))
        if key not in openspiel_strategy:
            report_lines.append(f"  [{key}]: missing from OpenSpiel")
            max_diff = float('inf')
            continue
        theirs = openspiel_strategy[key][action_ids]
        diff = float(np.max(np.abs(ours - theirs)))
        max_diff = max(max_diff, diff)
        report_lines.append(f"  [{key}]: ours={np.round(ours, 3)} openspiel={np.round(theirs, 3)}")

    return max_diff, report_lines


def run_comparison(
    game_name: str = "kuhn_poker",
    our_iterations: int = 1000,
    openspiel_iterations: int = 1000
) -> str:
    """
    Run full comparison between our solver and OpenSpiel.

    Our solver is configured like OpenSpiel's CFRSolver: alternating
    updates, plain regret matching, uniform averaging.

    Args:
        game_name: OpenSpiel game name
        our_iterations: Iterations for our solver
        openspiel_iterations: Iterations for OpenSpiel

    Returns:
        Comparison report string
    """
    report_lines = [
        "TabularCFR vs OpenSpiel Comparison",
        "=" * 60,
        ""
    ]

    if not OPENSPIEL_AVAILABLE:
        report_lines.append("OpenSpiel not available. Skipping comparison.")
        report_lines.append("Install with: pip install open_spiel")
        return "\n".join(report_lines)

    config = CFRConfig(
        alternating_update=True,
        reset_negative_regrets=False,
        linear_averaging=False,
    )
    solver = TabularCFRSolver(OpenSpielGame(game_name), config)

    report_lines.append(f"Running our TabularCFR for {our_iterations} iterations...")
    solver.solve(iterations=our_iterations)
    report_lines.append(f"Our exploitability: {solver.exploitability():.6f}")

    report_lines.append(f"Running OpenSpiel CFR for {openspiel_iterations} iterations...")
    os_strategies = run_openspiel_cfr(game_name, openspiel_iterations)

    max_diff, lines = compare_strategies(solver, os_strategies)
    report_lines.append("")
    report_lines.append("Our Strategy vs OpenSpiel:")
    report_lines.append("-" * 40)
    report_lines.extend(lines)
    report_lines.append("")
    report_lines.append(f"Max probability difference: {max_diff:.6f}")
    report_lines.append("=" * 60)

    return "\n".join(report_lines)


def validate_against_known_nash(iterations: int = 10000) -> Tuple[bool, str]:
    """
    Validate our solver against known Kuhn poker Nash equilibrium.

    The Nash equilibrium for Kuhn poker is well-known:
    - P1 with J: bet with probability α ∈ [0, 1/3]
    - P1 with Q: check always
    - P1 with K: bet with probability 3α
    - P2 with J facing bet: fold always
    - P2 with Q facing bet: call with probability 1/3
    - P2 with K facing bet: call always

    Returns:
        (valid, report): Whether strategy is close to Nash and detailed report
    """
    from tabular_cfr.games.kuhn import KuhnPoker

    solver = TabularCFRSolver(KuhnPoker())
    policy = solver.solve(iterations=iterations)

    report_lines = [
        "Nash Equilibrium Validation",
        "=" * 50,
        ""
    ]

    valid = True
    expl = solver.exploitability()
    report_lines.append(f"Exploitability: {expl:.6f}")

    if expl > 0.05:
        valid = False
        report_lines.append("WARNING: Exploitability too high!")

    report_lines.append("")
    report_lines.append("Key Strategy Checks:")
    report_lines.append("-" * 40)

    checks = [
        ("J:", 1, 0.0, 0.4, "P1 Jack bet frequency"),
        ("Q:", 0, 0.9, 1.0, "P1 Queen check frequency"),
        ("J:b", 0, 0.95, 1.0, "P2 Jack fold vs bet"),
        ("K:b", 1, 0.95, 1.0, "P2 King call vs bet"),
    ]

    for infoset_key, action_idx, low, high, description in checks:
        prob = policy.action_probabilities(infoset_key, 2)[action_idx]

        status = "✓" if low <= prob <= high else "✗"
        if not (low <= prob <= high):
            valid = False

        report_lines.append(
            f"  {status} {description}: {prob:.3f} (expected {low:.2f}-{high:.2f})"
        )

    report_lines.append("")
    report_lines.append("=" * 50)
    report_lines.append(f"Validation: {'PASSED' if valid else 'FAILED'}")

    return valid, "\n".join(report_lines)
