"""Temporal Context Model (TCM) link, config and result models."""

from pydantic import BaseModel, ConfigDict, Field

import lucid.config as cfg


class TemporalSpreadingConfig(BaseModel):
    """Parameters for spreading along episode links (Howard & Kahana 2002)."""
    forward_strength: float = Field(
        default_factory=lambda: cfg.TEMPORAL_FORWARD_STRENGTH, ge=0.0,
        description="Base multiplier for links toward later events",
    )
    backward_strength: float = Field(
        default_factory=lambda: cfg.TEMPORAL_BACKWARD_STRENGTH, ge=0.0,
        description="Base multiplier for links toward earlier events",
    )
    distance_decay_rate: float = Field(
        default_factory=lambda: cfg.TEMPORAL_DISTANCE_DECAY_RATE, ge=0.0,
    )
    episode_boost: float = Field(
        default_factory=lambda: cfg.TEMPORAL_EPISODE_BOOST, ge=0.0,
    )
    context_persistence: float = Field(
        default_factory=lambda: cfg.TEMPORAL_CONTEXT_PERSISTENCE,
        description="TCM beta. Not used by spreading yet",
    )
    max_temporal_distance: int = Field(
        default_factory=lambda: cfg.TEMPORAL_MAX_DISTANCE, ge=0,
        description="Position pairs further apart than this get no link",
    )

    model_config = ConfigDict(validate_default=True)


class TemporalLink(BaseModel):
    """A link between two events of one episode.

    Positions index into the episode; memories are global memory indices.
    source_position < target_position by construction.
    """
    source_position: int
    target_position: int
    source_memory: int
    target_memory: int
    forward_strength: float
    backward_strength: float

    @property
    def distance(self) -> int:
        return self.target_position - self.source_position


class TemporalSpreadingResult(BaseModel):
    """Result of temporal spreading from one seed memory."""
    activations: list[float] = Field(default_factory=list)
    forward_activated: list[int] = Field(
        default_factory=list, description="Reached via forward links, ascending"
    )
    backward_activated: list[int] = Field(
        default_factory=list, description="Reached via backward links, ascending"
    )
