"""Tests for the Lucid Core CLI."""

import json

import pytest
from click.testing import CliRunner

import lucid.config as cfg
from lucid.interfaces.cli import cli


@pytest.fixture
def runner(isolated_settings):
    """Click test runner with settings isolated to a temp dir."""
    return CliRunner()


class TestSpread:
    def test_spread_text(self, runner, graph_file):
        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0", "--unidirectional"])
        assert result.exit_code == 0
        assert "Spreading Activation" in result.output
        assert "Depth 0: 0" in result.output
        assert "Depth 3: 3" in result.output

    def test_spread_json(self, runner, graph_file):
        result = runner.invoke(cli, [
            "spread", str(graph_file), "--seed", "0", "--depth", "1", "--unidirectional", "--json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["visited_by_depth"] == [[0], [1]]
        assert data["activations"][1] == pytest.approx(0.7)

    def test_spread_options(self, runner, graph_file):
        result = runner.invoke(cli, [
            "spread", str(graph_file), "--seed", "0", "--activation", "0.5",
            "--decay", "0.5", "--depth", "1", "--unidirectional", "--json",
        ])
        data = json.loads(result.output)
        assert data["activations"][:2] == [0.5, pytest.approx(0.25)]

    def test_invalid_config(self, runner, graph_file):
        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0", "--decay", "-1"])
        assert result.exit_code == 2

    def test_seed_required(self, runner, graph_file):
        result = runner.invoke(cli, ["spread", str(graph_file)])
        assert result.exit_code == 2

    def test_invalid_graph_file(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"num_nodes": "many"}')
        result = runner.invoke(cli, ["spread", str(bad), "--seed", "0"])
        assert result.exit_code == 2
        assert "GRAPH" in result.output

    def test_visited_summary(self, runner, graph_file):
        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0", "--unidirectional"])
        assert "Visited:  4 nodes in 3 hops" in result.output

    def test_non_utf8_graph_file(self, runner, tmp_path):
        bad = tmp_path / "graph.json"
        bad.write_bytes(b"\xff\xfe\x00bad")
        result = runner.invoke(cli, ["spread", str(bad), "--seed", "0"])
        assert result.exit_code == 2
        assert "GRAPH" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_bad_config_default_is_usage_error(self, runner, graph_file, monkeypatch):
        monkeypatch.setattr(cfg, "SPREADING_MAX_DEPTH", -1)
        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0"])
        assert result.exit_code == 2
        assert "Traceback" not in result.output
        assert "depth must be non-negative" in result.output

    def test_bad_config_model_default_is_usage_error(self, runner, graph_file, monkeypatch):
        monkeypatch.setattr(cfg, "SPREADING_MAX_NODES", -3)
        result = runner.invoke(cli, ["top", str(graph_file), "--seed", "0"])
        assert result.exit_code == 2


class TestTop:
    def test_top_k(self, runner, graph_file):
        result = runner.invoke(cli, [
            "top", str(graph_file), "--seed", "0", "-k", "2", "--unidirectional", "--json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [d["node"] for d in data] == [0, 1]


class TestPath:
    def test_path_found(self, runner, graph_file):
        result = runner.invoke(cli, ["path", str(graph_file), "0", "3"])
        assert result.exit_code == 0
        assert "0 -> 1 -> 2 -> 3" in result.output
        assert "3 hops" in result.output

    def test_path_missing(self, runner, graph_file):
        result = runner.invoke(cli, ["path", str(graph_file), "3", "0"])
        assert result.exit_code == 0
        assert "No path" in result.output

    def test_path_json(self, runner, graph_file):
        result = runner.invoke(cli, ["path", str(graph_file), "1", "3", "--json"])
        assert json.loads(result.output) == [1, 2, 3]


class TestPageRank:
    def test_pagerank_json(self, runner, graph_file):
        result = runner.invoke(cli, ["pagerank", str(graph_file), "--iterations", "20", "--json"])
        assert result.exit_code == 0
        ranks = json.loads(result.output)
        assert len(ranks) == 4
        assert sum(ranks) == pytest.approx(1.0)

    def test_pagerank_text(self, runner, graph_file):
        result = runner.invoke(cli, ["pagerank", str(graph_file), "--top", "1"])
        assert result.exit_code == 0
        assert "PageRank" in result.output

    def test_damping_range(self, runner, graph_file):
        result = runner.invoke(cli, ["pagerank", str(graph_file), "--damping", "1.5"])
        assert result.exit_code == 2


class TestTemporal:
    def test_episode_links(self, runner):
        result = runner.invoke(cli, ["episode", "10", "20", "30", "--json"])
        assert result.exit_code == 0
        links = json.loads(result.output)
        assert len(links) == 3
        assert links[0]["source_memory"] == 10

    def test_episode_text(self, runner):
        result = runner.invoke(cli, ["episode", "1", "2"])
        assert "2 events, 1 links" in result.output

    def test_temporal_spread(self, runner, episodes_file):
        result = runner.invoke(cli, ["temporal", str(episodes_file), "--seed", "1", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["forward_activated"] == [2, 4]
        assert data["backward_activated"] == [0, 3]
        assert len(data["activations"]) == 5

    def test_neighbors_before(self, runner, episodes_file):
        result = runner.invoke(cli, [
            "neighbors", str(episodes_file), "2", "--direction", "before", "--json",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [d["memory"] for d in data] == [1, 0]

    def test_neighbors_none(self, runner, episodes_file):
        result = runner.invoke(cli, ["neighbors", str(episodes_file), "99"])
        assert "No temporal neighbors" in result.output

    def test_invalid_episodes_file(self, runner, tmp_path):
        bad = tmp_path / "episodes.json"
        bad.write_text('{"episode": [1, 2]}')
        result = runner.invoke(cli, ["temporal", str(bad), "--seed", "1"])
        assert result.exit_code == 2

    def test_non_utf8_episodes_file(self, runner, tmp_path):
        bad = tmp_path / "episodes.json"
        bad.write_bytes(b"\xff\xfe\x00bad")
        result = runner.invoke(cli, ["neighbors", str(bad), "1"])
        assert result.exit_code == 2
        assert "EPISODES" in result.output


class TestSettings:
    def test_show(self, runner):
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 0
        assert "[spreading]" in result.output
        assert "[advanced]" not in result.output

    def test_show_dev_json(self, runner):
        result = runner.invoke(cli, ["settings", "show", "--dev", "--json"])
        assert "advanced" in json.loads(result.output)

    def test_set_and_reset(self, runner, isolated_settings):
        result = runner.invoke(cli, ["settings", "set", "spreading.max_depth", "5"])
        assert result.exit_code == 0
        assert "spreading.max_depth = 5" in result.output
        assert json.loads(isolated_settings.read_text())["spreading"]["max_depth"] == 5

        result = runner.invoke(cli, ["settings", "reset"])
        assert result.exit_code == 0
        assert not isolated_settings.exists()

    def test_set_unknown(self, runner):
        result = runner.invoke(cli, ["settings", "set", "spreading.bogus", "1"])
        assert result.exit_code == 2

    def test_set_requires_section(self, runner):
        result = runner.invoke(cli, ["settings", "set", "decay", "0.5"])
        assert result.exit_code == 2

    def test_set_negative_count_rejected(self, runner, isolated_settings, graph_file):
        result = runner.invoke(cli, ["settings", "set", "--", "spreading.max_depth", "-1"])
        assert result.exit_code == 2
        saved = json.loads(isolated_settings.read_text()) if isolated_settings.exists() else {}
        assert "max_depth" not in saved.get("spreading", {})

        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0"])
        assert result.exit_code == 0

    def test_negative_count_in_file_ignored(self, runner, isolated_settings, graph_file):
        isolated_settings.write_text('{"spreading": {"max_depth": -1}}')
        result = runner.invoke(cli, ["spread", str(graph_file), "--seed", "0", "--json"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)["visited_by_depth"]) == 4
