"""Graph analytics over the association graph.

Consumers of the adjacency built in lucid.activation.graph:
- Top-k extraction from an activation vector
- Shortest activation path (unweighted BFS over forward links)
- PageRank by power iteration for whole-graph importance
"""

import logging
from collections import deque
from typing import Optional, Sequence

import numpy as np

import lucid.config as cfg
from lucid.activation.graph import build_adjacency
from lucid.models.association import Association

logger = logging.getLogger("lucid-analytics")


def get_top_activated(activations: Sequence[float], top_k: Optional[int] = None) -> list[int]:
    """Indices of the top_k most activated nodes, strongest first.

    Only strictly positive activations qualify. Equal activations keep
    their index order.
    """
    if top_k is None:
        top_k = cfg.TOP_K_DEFAULT
    if top_k < 0:
        raise ValueError(f"top_k must be non-negative, got {top_k}")

    indexed = [(i, a) for i, a in enumerate(activations) if a > 0.0]
    indexed.sort(key=lambda x: x[1], reverse=True)
    return [i for i, _ in indexed[:top_k]]


def find_activation_path(
    num_nodes: int,
    associations: Sequence[Association],
    source: int,
    target: int,
) -> list[int]:
    """Shortest path (in hops) from source to target along forward links.

    Returns [source] when source == target, and an empty list when target
    is unreachable or either endpoint is outside the graph.
    """
    forward_adj = build_adjacency(num_nodes, associations).forward

    if source == target:
        return [source]
    if not (0 <= source < num_nodes and 0 <= target < num_nodes):
        return []

    visited = [False] * num_nodes
    parent: list[Optional[int]] = [None] * num_nodes
    queue = deque([source])
    visited[source] = True

    while queue:
        current = queue.popleft()
        for neighbor, _ in forward_adj[current]:
            if visited[neighbor]:
                continue
            visited[neighbor] = True
            parent[neighbor] = current
            queue.append(neighbor)

            if neighbor == target:
                path = []
                node: Optional[int] = target
                while node is not None:
                    path.append(node)
                    node = parent[node]
                path.reverse()
                return path

    return []


def compute_pagerank(
    num_nodes: int,
    associations: Sequence[Association],
    damping: Optional[float] = None,
    iterations: Optional[int] = None,
) -> list[float]:
    """PageRank by power iteration.

    Edge strengths are ignored: each node splits damping × rank evenly over
    its forward links (a repeated edge counts once per occurrence). Dangling
    nodes spread theirs uniformly over every node. Runs exactly `iterations`
    rounds with no convergence check, so ranks only approximately sum to 1.
    """
    if damping is None:
        damping = cfg.PAGERANK_DAMPING
    if iterations is None:
        iterations = cfg.PAGERANK_ITERATIONS
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    adjacency = build_adjacency(num_nodes, associations)
    if adjacency.num_nodes == 0:
        return []

    n = float(adjacency.num_nodes)
    ranks = np.full(adjacency.num_nodes, 1.0 / n, dtype=np.float64)
    new_ranks = np.zeros(adjacency.num_nodes, dtype=np.float64)

    for _ in range(iterations):
        new_ranks.fill((1.0 - damping) / n)

        for i, edges in enumerate(adjacency.forward):
            degree = adjacency.out_degree(i)
            if degree == 0:
                new_ranks += damping * ranks[i] / n
            else:
                contribution = damping * ranks[i] / degree
                for target, _ in edges:
                    new_ranks[target] += contribution

        ranks, new_ranks = new_ranks, ranks

    logger.debug(f"PageRank: {num_nodes} nodes, {iterations} iterations")
    return ranks.tolist()
