"""Spreading activation through the association graph.

Implements the ACT-R fan-normalized spreading equation:

    A_j = Σ (W_i / n_i) × S_ij

where W_i is the activation of source i, n_i its fan (number of outgoing
links) and S_ij the associative strength from i to j.

1. Seed nodes start with their given activation
2. Each round, every frontier node above the activation floor spreads to
   its neighbors, split across its fan and decayed per hop
3. Backward links carry a further penalty when spreading bidirectionally
4. A visitation budget bounds the traversal
"""

import logging
from typing import Optional, Sequence

import lucid.config as cfg
from lucid.activation.graph import build_adjacency
from lucid.models.activation import SpreadingConfig, SpreadingResult
from lucid.models.association import Association

logger = logging.getLogger("lucid-spreading")


def spread_activation(
    num_nodes: int,
    associations: Sequence[Association],
    seed_indices: Sequence[int],
    seed_activations: Sequence[float] = (),
    config: Optional[SpreadingConfig] = None,
    depth: Optional[int] = None,
) -> SpreadingResult:
    """Spread activation outward from seed nodes.

    Args:
        num_nodes: Total number of nodes in the graph
        associations: Edges with forward/backward strengths
        seed_indices: Starting nodes (not deduplicated)
        seed_activations: Initial activation per seed; missing entries
            default to 1.0
        config: Spreading parameters (defaults from lucid.config)
        depth: Maximum number of spreading rounds

    Returns:
        SpreadingResult with the cumulative activation of every node and
        the nodes first reached at each depth (level 0 = seeds).

    The max_nodes budget is checked before each edge and only stops the
    current edge loop. Sources already in the frontier are still processed,
    so the visited count can overshoot the budget within a round.
    """
    if config is None:
        config = SpreadingConfig()
    if depth is None:
        depth = cfg.SPREADING_MAX_DEPTH
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")

    adjacency = build_adjacency(num_nodes, associations)
    forward_adj = adjacency.forward
    backward_adj = adjacency.backward

    activations = [0.0] * num_nodes
    for i, idx in enumerate(seed_indices):
        if 0 <= idx < num_nodes:
            activations[idx] = seed_activations[i] if i < len(seed_activations) else 1.0

    visited: set[int] = set(seed_indices)
    visited_by_depth: list[list[int]] = [list(seed_indices)]
    frontier: list[int] = list(seed_indices)
    total_visited = len(frontier)

    for _ in range(depth):
        if total_visited >= config.max_nodes:
            logger.debug(f"Visitation budget reached ({total_visited}/{config.max_nodes})")
            break

        next_frontier: list[int] = []
        # Applied after the round so every source sees last round's values
        deltas: dict[int, float] = {}

        for source_idx in frontier:
            if not 0 <= source_idx < num_nodes:
                continue
            source_activation = activations[source_idx]
            if source_activation < config.minimum_activation:
                continue

            forward_edges = forward_adj[source_idx]
            fan = float(max(len(forward_edges), 1))

            for target_idx, strength in forward_edges:
                if total_visited >= config.max_nodes:
                    break

                spread = (source_activation / fan) * strength * config.decay_per_hop
                deltas[target_idx] = deltas.get(target_idx, 0.0) + spread

                if target_idx not in visited:
                    visited.add(target_idx)
                    next_frontier.append(target_idx)
                    total_visited += 1

            if config.bidirectional:
                backward_edges = backward_adj[source_idx]
                back_fan = float(max(len(backward_edges), 1))

                for target_idx, strength in backward_edges:
                    if total_visited >= config.max_nodes:
                        break

                    spread = (
                        (source_activation / back_fan) * strength
                        * config.decay_per_hop * cfg.BACKWARD_SPREAD_PENALTY
                    )
                    deltas[target_idx] = deltas.get(target_idx, 0.0) + spread

                    if target_idx not in visited:
                        visited.add(target_idx)
                        next_frontier.append(target_idx)
                        total_visited += 1

        # Seeds and already-visited nodes still accumulate
        for idx, delta in deltas.items():
            activations[idx] += delta

        if not next_frontier:
            logger.debug(f"Frontier exhausted after {len(visited_by_depth) - 1} rounds")
            break

        visited_by_depth.append(next_frontier)
        frontier = next_frontier

    return SpreadingResult(activations=activations, visited_by_depth=visited_by_depth)
