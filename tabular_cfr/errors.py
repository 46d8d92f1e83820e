"""
Exception types raised by the solver.

Degenerate regret vectors and empty average strategies are not errors:
both fall back to the uniform distribution where they are read.
"""


class CFRError(Exception):
    """Base class for solver errors."""


class MissingNodeError(CFRError, KeyError):
    """
    Traversal reached an information state that has no node.

    Means the initialization walk did not reach every state the traversal
    can reach, or the game is not deterministic in its legal actions.
    """

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No info-state node for key {self.key!r}"


class InconsistentInfoStateError(CFRError, ValueError):
    """Two histories share an info-state key but not an action count."""

    def __init__(self, key, expected: int, actual: int):
        super().__init__(
            f"Info state {key!r} has {actual} legal actions, "
            f"expected {expected}"
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class InfoStateKeyTypeError(CFRError, TypeError):
    """An info-state key is not an instance of the configured key type."""

    def __init__(self, key, key_type: type):
        super().__init__(
            f"Info-state key {key!r} is {type(key).__name__}, "
            f"expected {key_type.__name__}"
        )
        self.key = key
        self.key_type = key_type


class CheckpointError(CFRError, ValueError):
    """A persisted node table is malformed or does not match the game."""
