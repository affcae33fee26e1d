"""Runtime settings management for Lucid Core.

Layers (lowest → highest priority):
    config.py defaults → DATA_DIR/settings.json

Usage:
    from lucid.settings import load_on_startup, get_current_settings, apply_settings

    load_on_startup()                    # Call once before spreading
    settings = get_current_settings()    # Read merged config
    apply_settings({"spreading": {"decay_per_hop": 0.5}})  # Partial update
"""

import json
import logging
from typing import Any, Optional

import lucid.config as cfg

logger = logging.getLogger("lucid-settings")

SETTINGS_FILE = cfg.DATA_DIR / "settings.json"

# Mapping: settings JSON path → config.py attribute name
_SETTING_MAP: dict[str, str] = {
    # Spreading
    "spreading.decay_per_hop": "SPREADING_DECAY_PER_HOP",
    "spreading.minimum_activation": "SPREADING_MINIMUM_ACTIVATION",
    "spreading.max_nodes": "SPREADING_MAX_NODES",
    "spreading.bidirectional": "SPREADING_BIDIRECTIONAL",
    "spreading.max_depth": "SPREADING_MAX_DEPTH",
    # Analytics
    "analytics.pagerank_damping": "PAGERANK_DAMPING",
    "analytics.pagerank_iterations": "PAGERANK_ITERATIONS",
    "analytics.top_k": "TOP_K_DEFAULT",
    # Temporal
    "temporal.forward_strength": "TEMPORAL_FORWARD_STRENGTH",
    "temporal.backward_strength": "TEMPORAL_BACKWARD_STRENGTH",
    "temporal.distance_decay_rate": "TEMPORAL_DISTANCE_DECAY_RATE",
    "temporal.episode_boost": "TEMPORAL_EPISODE_BOOST",
    "temporal.max_distance": "TEMPORAL_MAX_DISTANCE",
    "temporal.neighbor_limit": "TEMPORAL_NEIGHBOR_LIMIT",
    # Advanced (dev)
    "advanced.backward_spread_penalty": "BACKWARD_SPREAD_PENALTY",
    "advanced.context_persistence": "TEMPORAL_CONTEXT_PERSISTENCE",
}

# config.py attribute → (min, max) accepted by apply/load; None = unbounded
_DOMAINS: dict[str, tuple[Optional[float], Optional[float]]] = {
    "SPREADING_DECAY_PER_HOP": (0.0, None),
    "SPREADING_MINIMUM_ACTIVATION": (0.0, None),
    "SPREADING_MAX_NODES": (0, None),
    "SPREADING_MAX_DEPTH": (0, None),
    "PAGERANK_DAMPING": (0.0, 1.0),
    "PAGERANK_ITERATIONS": (0, None),
    "TOP_K_DEFAULT": (0, None),
    "TEMPORAL_FORWARD_STRENGTH": (0.0, None),
    "TEMPORAL_BACKWARD_STRENGTH": (0.0, None),
    "TEMPORAL_DISTANCE_DECAY_RATE": (0.0, None),
    "TEMPORAL_EPISODE_BOOST": (0.0, None),
    "TEMPORAL_MAX_DISTANCE": (0, None),
    "TEMPORAL_NEIGHBOR_LIMIT": (0, None),
    "BACKWARD_SPREAD_PENALTY": (0.0, None),
}

# Values as shipped in config.py, for reset_settings()
_DEFAULTS: dict[str, Any] = {attr: getattr(cfg, attr) for attr in _SETTING_MAP.values()}


# =========================================================================
# JSON persistence
# =========================================================================

def _load_settings_json() -> dict[str, Any]:
    """Load settings.json, returning empty dict if missing/corrupt."""
    if not SETTINGS_FILE.exists():
        return {}
    try:
        data = json.loads(SETTINGS_FILE.read_text())
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load {SETTINGS_FILE}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {SETTINGS_FILE}: top level is not an object")
        return {}
    return data


def _save_settings_json(data: dict[str, Any]) -> None:
    SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_FILE.write_text(json.dumps(data, indent=2) + "\n")


def _coerce(value: Any, existing: Any) -> Any:
    """Coerce value to match the type of existing."""
    if existing is None:
        return value
    if isinstance(existing, bool):
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)
    if isinstance(existing, int):
        return int(value)
    if isinstance(existing, float):
        return float(value)
    return value


def _in_domain(attr: str, value: Any) -> bool:
    """Check a coerced value against _DOMAINS. NaN is never in range."""
    low, high = _DOMAINS.get(attr, (None, None))
    if low is None and high is None:
        return True
    if value != value:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _apply_value(dotpath: str, value: Any) -> Any:
    """setattr a coerced value onto config.py. Returns the applied value, or None."""
    attr = _SETTING_MAP.get(dotpath)
    if not attr or not hasattr(cfg, attr):
        logger.warning(f"Unknown setting: {dotpath}")
        return None
    existing = getattr(cfg, attr)
    try:
        value = _coerce(value, existing)
    except (ValueError, TypeError):
        logger.warning(f"Cannot coerce {value!r} for {dotpath}, keeping {existing!r}")
        return None
    if not _in_domain(attr, value):
        logger.warning(f"Out of range {value!r} for {dotpath}, keeping {existing!r}")
        return None
    setattr(cfg, attr, value)
    return value


# =========================================================================
# Public API
# =========================================================================

def get_current_settings(include_dev: bool = False) -> dict[str, Any]:
    """Return current config as nested dict.

    Args:
        include_dev: If True, include the advanced section.
    """
    result: dict[str, dict[str, Any]] = {}
    for dotpath, attr in _SETTING_MAP.items():
        section, _, key = dotpath.partition(".")
        result.setdefault(section, {})[key] = getattr(cfg, attr, None)

    if not include_dev:
        result.pop("advanced", None)
    return result


def apply_settings(updates: dict[str, Any]) -> dict[str, str]:
    """Apply partial settings update.

    1. Merge into settings.json
    2. Hot-reload config.py module attributes via setattr

    Unknown keys, uncoercible values and out-of-range values are skipped.

    Returns:
        Dict of applied changes: {"section.key": "new_value", ...}
    """
    current = _load_settings_json()
    applied: dict[str, str] = {}

    for section, values in updates.items():
        if not isinstance(values, dict):
            continue

        for key, value in values.items():
            dotpath = f"{section}.{key}"
            new_value = _apply_value(dotpath, value)
            if new_value is None:
                continue
            current.setdefault(section, {})[key] = new_value
            applied[dotpath] = str(new_value)

    _save_settings_json(current)
    return applied


def reset_settings() -> None:
    """Delete settings.json and restore config.py defaults."""
    if SETTINGS_FILE.exists():
        SETTINGS_FILE.unlink()
    for attr, value in _DEFAULTS.items():
        setattr(cfg, attr, value)
    logger.info("Settings reset to defaults")


def load_on_startup() -> None:
    """Load settings.json overrides into config.py."""
    saved = _load_settings_json()
    count = 0
    for section, values in saved.items():
        if not isinstance(values, dict):
            continue
        for key, value in values.items():
            if _apply_value(f"{section}.{key}", value) is not None:
                count += 1

    if count:
        logger.info(f"Loaded {count} settings overrides from {SETTINGS_FILE}")
