"""Adjacency construction for the association graph.

The engine keeps no graph between calls: every operation rebuilds its
adjacency from the caller's edge list, so results depend only on inputs.
"""

from dataclasses import dataclass, field
from typing import Iterable

from lucid.models.association import Association

# Per-node ordered (neighbor, strength) pairs
AdjacencyList = list[list[tuple[int, float]]]


@dataclass
class Adjacency:
    """Forward and backward neighbor lists, one entry per node."""
    forward: AdjacencyList = field(default_factory=list)
    backward: AdjacencyList = field(default_factory=list)

    @property
    def num_nodes(self) -> int:
        return len(self.forward)

    def out_degree(self, node: int) -> int:
        return len(self.forward[node])


def build_adjacency(num_nodes: int, associations: Iterable[Association]) -> Adjacency:
    """Split an edge list into forward and backward adjacency lists.

    forward[source] receives (target, forward_strength) and backward[target]
    receives (source, backward_strength), both in edge-input order. Edges
    with an endpoint outside [0, num_nodes) are skipped.
    """
    if num_nodes < 0:
        raise ValueError(f"num_nodes must be non-negative, got {num_nodes}")

    forward: AdjacencyList = [[] for _ in range(num_nodes)]
    backward: AdjacencyList = [[] for _ in range(num_nodes)]

    for assoc in associations:
        if 0 <= assoc.source < num_nodes and 0 <= assoc.target < num_nodes:
            forward[assoc.source].append((assoc.target, assoc.forward_strength))
            backward[assoc.target].append((assoc.source, assoc.backward_strength))

    return Adjacency(forward=forward, backward=backward)
