"""Lucid Core data models."""

from lucid.models.activation import SpreadingConfig, SpreadingResult
from lucid.models.association import Association, AssociationGraph
from lucid.models.temporal import (
    TemporalLink,
    TemporalSpreadingConfig,
    TemporalSpreadingResult,
)

__all__ = [
    "Association",
    "AssociationGraph",
    "SpreadingConfig",
    "SpreadingResult",
    "TemporalLink",
    "TemporalSpreadingConfig",
    "TemporalSpreadingResult",
]
