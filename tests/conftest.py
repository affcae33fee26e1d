"""Shared test fixtures for Lucid Core."""

import json
from typing import Optional

import pytest

from lucid.models.association import Association


def make_assoc(
    source: int, target: int, strength: float = 1.0, backward: Optional[float] = None
) -> Association:
    """Edge whose return path is half as strong unless backward is given."""
    return Association(
        source=source,
        target=target,
        forward_strength=strength,
        backward_strength=strength * 0.5 if backward is None else backward,
    )


@pytest.fixture
def chain():
    """Linear chain: 0 -> 1 -> 2 -> 3"""
    return [make_assoc(0, 1), make_assoc(1, 2), make_assoc(2, 3)]


@pytest.fixture
def fan():
    """Fan-out: 0 -> 1, 0 -> 2, 0 -> 3"""
    return [make_assoc(0, 1), make_assoc(0, 2), make_assoc(0, 3)]


@pytest.fixture
def cycle():
    """3-cycle: 0 -> 1 -> 2 -> 0"""
    return [make_assoc(0, 1), make_assoc(1, 2), make_assoc(2, 0)]


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point settings persistence at a temp file and restore config afterwards."""
    import lucid.config as cfg
    import lucid.settings as sm

    monkeypatch.setattr(sm, "SETTINGS_FILE", tmp_path / "settings.json")
    snapshot = {attr: getattr(cfg, attr) for attr in sm._SETTING_MAP.values()}
    yield tmp_path / "settings.json"
    for attr, value in snapshot.items():
        setattr(cfg, attr, value)


@pytest.fixture
def graph_file(tmp_path, chain):
    """JSON graph file holding the 4-node chain."""
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({
        "num_nodes": 4,
        "associations": [a.model_dump() for a in chain],
    }))
    return path


@pytest.fixture
def episodes_file(tmp_path):
    """Two episodes sharing memory 1."""
    path = tmp_path / "episodes.json"
    path.write_text(json.dumps([[0, 1, 2], [3, 1, 4]]))
    return path
