"""
Saving and loading node tables.

A table is stored as one `.npz` archive in flat layout: the keys, an offsets
vector (node k owns entries offsets[k]:offsets[k+1]) and the three
concatenated vectors. Per-node lengths and action order survive exactly.
Only string keys can be stored.
"""

import logging
from typing import Tuple

import numpy as np

from tabular_cfr.engine.nodes import InfoStateNode, NodeTable
from tabular_cfr.errors import CheckpointError

logger = logging.getLogger(__name__)

VECTOR_FIELDS = ('strategy', 'cumulative_regret', 'cumulative_strategy')


def _concatenate(nodes: NodeTable, field: str) -> np.ndarray:
    if not nodes:
        return np.zeros(0)
    return np.concatenate([getattr(node, field) for node in nodes.values()])


def save_nodes(path, nodes: NodeTable, iterations: int = 0) -> None:
    """
    Write `nodes` (and the iteration count reached) to `path`.

    Raises:
        CheckpointError: a key is not a string
    """
    keys = list(nodes)
    for key in keys:
        if not isinstance(key, str):
            raise CheckpointError(f"Only str keys can be saved, got {key!r}")

    lengths = [node.num_actions for node in nodes.values()]
    offsets = np.zeros(len(keys) + 1, dtype=np.int64)
    np.cumsum(lengths, out=offsets[1:])

    # Through a handle, so np.savez does not append ".npz" to the path
    with open(path, 'wb') as f:
        np.savez(
            f,
            keys=np.array(keys, dtype=str),
            offsets=offsets,
            iterations=np.array(iterations, dtype=np.int64),
            **{field: _concatenate(nodes, field) for field in VECTOR_FIELDS}
        )
    logger.info("Saved %d info-state nodes to %s", len(keys), path)


def load_nodes(path) -> Tuple[NodeTable, int]:
    """
    Read a table written by `save_nodes`.

    Returns:
        (nodes, iterations)

    Raises:
        CheckpointError: the archive is missing fields or its offsets do
            not match its vectors
    """
    with np.load(path, allow_pickle=False) as data:
        missing = [f for f in ('keys', 'offsets', 'iterations') + VECTOR_FIELDS
                   if f not in data.files]
        if missing:
            raise CheckpointError(f"{path} is missing fields: {missing}")

        keys = [str(k) for k in data['keys']]
        offsets = data['offsets']
        vectors = {field: data[field].astype(np.float64) for field in VECTOR_FIELDS}
        iterations = int(data['iterations'])

    if len(offsets) != len(keys) + 1 or offsets[0] != 0 or np.any(np.diff(offsets) < 1):
        raise CheckpointError(f"{path} has malformed offsets")
    for field, vector in vectors.items():
        if len(vector) != offsets[-1]:
            raise CheckpointError(
                f"{path}: {field} has {len(vector)} entries, expected {offsets[-1]}"
            )

    nodes: NodeTable = {}
    for k, key in enumerate(keys):
        start, end = offsets[k], offsets[k + 1]
        nodes[key] = InfoStateNode(
            **{field: vectors[field][start:end].copy() for field in VECTOR_FIELDS}
        )

    logger.info("Loaded %d info-state nodes from %s", len(nodes), path)
    return nodes, iterations
