"""Spreading activation configuration and result models."""

from pydantic import BaseModel, ConfigDict, Field

import lucid.config as cfg


class SpreadingConfig(BaseModel):
    """Parameters for breadth-limited spreading activation.

    Defaults are read from lucid.config when the model is built, so runtime
    settings overrides apply to configs created afterwards.
    """
    decay_per_hop: float = Field(
        default_factory=lambda: cfg.SPREADING_DECAY_PER_HOP, ge=0.0,
        description="Multiplicative activation factor per hop",
    )
    minimum_activation: float = Field(
        default_factory=lambda: cfg.SPREADING_MINIMUM_ACTIVATION, ge=0.0,
        description="Sources below this activation do not spread",
    )
    max_nodes: int = Field(
        default_factory=lambda: cfg.SPREADING_MAX_NODES, ge=0,
        description="Visitation budget, checked before each edge",
    )
    bidirectional: bool = Field(default_factory=lambda: cfg.SPREADING_BIDIRECTIONAL)

    # Defaults come from mutable config, so they are checked like arguments
    model_config = ConfigDict(validate_default=True)


class SpreadingResult(BaseModel):
    """Result of spreading activation from a set of seeds."""
    activations: list[float] = Field(
        default_factory=list, description="Final activation per node index"
    )
    visited_by_depth: list[list[int]] = Field(
        default_factory=list,
        description="Level 0 is the seed list; later levels hold only nodes "
                    "first reached in that round",
    )

    @property
    def depth_reached(self) -> int:
        return len(self.visited_by_depth) - 1

    @property
    def total_visited(self) -> int:
        return sum(len(level) for level in self.visited_by_depth)
