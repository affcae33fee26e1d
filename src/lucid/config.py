"""Configuration constants for Lucid Core."""

import os
from pathlib import Path


# =============================================================================
# Paths
# =============================================================================
def _resolve_data_dir() -> Path:
    """Resolve data directory: LUCID_DATA_DIR env var, or ~/.lucid-core/"""
    env_dir = os.environ.get("LUCID_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".lucid-core"


DATA_DIR = _resolve_data_dir()

# =============================================================================
# Spreading Activation (ACT-R fan-normalized)
# =============================================================================
SPREADING_DECAY_PER_HOP = 0.7       # multiplicative factor per hop
SPREADING_MINIMUM_ACTIVATION = 0.01  # sources below this do not spread
SPREADING_MAX_NODES = 1000          # visitation budget (best-effort)
SPREADING_BIDIRECTIONAL = True
SPREADING_MAX_DEPTH = 3
BACKWARD_SPREAD_PENALTY = 0.7       # extra multiplier on backward edges

# =============================================================================
# Graph Analytics
# =============================================================================
PAGERANK_DAMPING = 0.85
PAGERANK_ITERATIONS = 100
TOP_K_DEFAULT = 10

# =============================================================================
# Temporal Context Model (Howard & Kahana 2002)
# =============================================================================
TEMPORAL_FORWARD_STRENGTH = 1.0
TEMPORAL_BACKWARD_STRENGTH = 0.7    # < forward: forward-recall bias
TEMPORAL_DISTANCE_DECAY_RATE = 0.3
TEMPORAL_EPISODE_BOOST = 1.2
TEMPORAL_CONTEXT_PERSISTENCE = 0.7  # beta; reserved, not used by spreading
TEMPORAL_MAX_DISTANCE = 10          # positions
TEMPORAL_NEIGHBOR_LIMIT = 10
