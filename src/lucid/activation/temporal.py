"""Temporal spreading activation within episodes.

Temporal Context Model (Howard & Kahana 2002): events recorded close
together in time cue each other, and recall runs forward more readily than
backward. Links within an episode therefore:
1. Decay exponentially with position distance
2. Are asymmetric: forward (toward later events) beats backward
3. Exist only up to a maximum position distance
"""

import logging
import math
from typing import Optional, Sequence

import lucid.config as cfg
from lucid.models.temporal import (
    TemporalLink,
    TemporalSpreadingConfig,
    TemporalSpreadingResult,
)
from lucid.types import TemporalDirection

logger = logging.getLogger("lucid-temporal")


def compute_temporal_link_strength(
    base_strength: float,
    position_distance: int,
    config: Optional[TemporalSpreadingConfig] = None,
) -> float:
    """strength = base × e^(-distance × decay_rate)

    Adjacent events get the strongest links.
    """
    if config is None:
        config = TemporalSpreadingConfig()
    return base_strength * math.exp(-float(position_distance) * config.distance_decay_rate)


def create_episode_links(
    event_memory_indices: Sequence[int],
    config: Optional[TemporalSpreadingConfig] = None,
) -> list[TemporalLink]:
    """Link every pair of events within max_temporal_distance of each other.

    Links are ordered by source position, then target position.
    """
    if config is None:
        config = TemporalSpreadingConfig()

    links: list[TemporalLink] = []
    n = len(event_memory_indices)
    if n < 2:
        return links

    for i in range(n):
        for j in range(i + 1, min(n, i + config.max_temporal_distance + 1)):
            distance = j - i
            links.append(TemporalLink(
                source_position=i,
                target_position=j,
                source_memory=event_memory_indices[i],
                target_memory=event_memory_indices[j],
                forward_strength=compute_temporal_link_strength(
                    config.forward_strength, distance, config
                ),
                backward_strength=compute_temporal_link_strength(
                    config.backward_strength, distance, config
                ),
            ))

    return links


def spread_temporal_activation(
    num_memories: int,
    temporal_links: Sequence[TemporalLink],
    seed_memory: int,
    seed_activation: float = 1.0,
    config: Optional[TemporalSpreadingConfig] = None,
) -> TemporalSpreadingResult:
    """Spread activation one step along the links touching a seed memory.

    Links where the seed is the source activate their target through the
    forward strength; links where it is the target activate their source
    through the backward strength. Both are scaled by episode_boost.

    An out-of-range seed yields all-zero activations and empty lists.
    """
    if config is None:
        config = TemporalSpreadingConfig()
    if num_memories < 0:
        raise ValueError(f"num_memories must be non-negative, got {num_memories}")

    activations = [0.0] * num_memories
    if not 0 <= seed_memory < num_memories:
        return TemporalSpreadingResult(activations=activations)

    activations[seed_memory] = seed_activation
    forward_activated: set[int] = set()
    backward_activated: set[int] = set()

    for link in temporal_links:
        if link.source_memory == seed_memory and 0 <= link.target_memory < num_memories:
            activations[link.target_memory] += (
                seed_activation * link.forward_strength * config.episode_boost
            )
            forward_activated.add(link.target_memory)

        if link.target_memory == seed_memory and 0 <= link.source_memory < num_memories:
            activations[link.source_memory] += (
                seed_activation * link.backward_strength * config.episode_boost
            )
            backward_activated.add(link.source_memory)

    return TemporalSpreadingResult(
        activations=activations,
        forward_activated=sorted(forward_activated),
        backward_activated=sorted(backward_activated),
    )


def spread_temporal_activation_multi(
    num_memories: int,
    episode_links: Sequence[Sequence[TemporalLink]],
    seed_memory: int,
    seed_activation: float = 1.0,
    config: Optional[TemporalSpreadingConfig] = None,
) -> TemporalSpreadingResult:
    """Spread from a seed memory through every episode it appears in.

    Per-episode results merge by elementwise maximum, never by sum, so a
    memory recurring across episodes is not boosted once per episode.
    """
    if config is None:
        config = TemporalSpreadingConfig()
    if num_memories < 0:
        raise ValueError(f"num_memories must be non-negative, got {num_memories}")

    combined = [0.0] * num_memories
    all_forward: set[int] = set()
    all_backward: set[int] = set()
    episodes_hit = 0

    for links in episode_links:
        in_episode = any(
            link.source_memory == seed_memory or link.target_memory == seed_memory
            for link in links
        )
        if not in_episode:
            continue

        episodes_hit += 1
        result = spread_temporal_activation(
            num_memories, links, seed_memory, seed_activation, config
        )
        for i, a in enumerate(result.activations):
            if a > combined[i]:
                combined[i] = a
        all_forward.update(result.forward_activated)
        all_backward.update(result.backward_activated)

    logger.debug(f"Seed {seed_memory} found in {episodes_hit}/{len(episode_links)} episodes")

    return TemporalSpreadingResult(
        activations=combined,
        forward_activated=sorted(all_forward),
        backward_activated=sorted(all_backward),
    )


def find_temporal_neighbors(
    temporal_links: Sequence[TemporalLink],
    anchor_memory: int,
    direction: "TemporalDirection | str" = TemporalDirection.BOTH,
    limit: Optional[int] = None,
) -> list[tuple[int, float]]:
    """What was I working on before/after this memory?

    Args:
        temporal_links: Links from create_episode_links
        anchor_memory: The reference memory
        direction: BEFORE ("before"/"backward"), AFTER ("after"/"forward");
            any other value means both
        limit: Maximum neighbors to return

    Returns:
        (memory, strength) pairs, nearest first, stronger first at equal
        distance. BEFORE neighbors report backward strength, AFTER
        neighbors forward strength.
    """
    if limit is None:
        limit = cfg.TEMPORAL_NEIGHBOR_LIMIT
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    direction = TemporalDirection.parse(direction)
    want_before = direction in (TemporalDirection.BEFORE, TemporalDirection.BOTH)
    want_after = direction in (TemporalDirection.AFTER, TemporalDirection.BOTH)

    # (memory, strength, distance)
    neighbors: list[tuple[int, float, int]] = []
    for link in temporal_links:
        if want_before and link.target_memory == anchor_memory:
            neighbors.append((link.source_memory, link.backward_strength, link.distance))
        if want_after and link.source_memory == anchor_memory:
            neighbors.append((link.target_memory, link.forward_strength, link.distance))

    neighbors.sort(key=lambda n: (n[2], -n[1]))

    return [(memory, strength) for memory, strength, _ in neighbors[:limit]]
