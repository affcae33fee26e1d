"""Lucid Core CLI.

Click-based command line interface over JSON graph and episode files.

Usage:
    lucid spread graph.json --seed 0 --depth 3
    lucid top graph.json --seed 0 --seed 4 -k 5
    lucid path graph.json 0 3
    lucid pagerank graph.json --iterations 50
    lucid episode 10 20 30
    lucid temporal episodes.json --seed 20
    lucid neighbors episodes.json 20 --direction before
    lucid settings show

A graph file is {"num_nodes": N, "associations": [{"source": ..., "target":
..., "forward_strength": ..., "backward_strength": ...}, ...]}. An episodes
file is a list of episodes, each a list of memory indices in event order.
"""

import json
import logging
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import TypeAdapter, ValidationError

from lucid import settings as settings_mod
from lucid.activation.analytics import compute_pagerank, find_activation_path, get_top_activated
from lucid.activation.spreading import spread_activation
from lucid.activation.temporal import (
    create_episode_links,
    find_temporal_neighbors,
    spread_temporal_activation_multi,
)
from lucid.models.activation import SpreadingConfig, SpreadingResult
from lucid.models.association import AssociationGraph
from lucid.models.temporal import TemporalLink
from lucid.types import TemporalDirection

logger = logging.getLogger("lucid-cli")

_EPISODES = TypeAdapter(list[list[int]])


def _json_out(data):
    """Print data as JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


@contextmanager
def _usage_errors():
    """Report engine and config ValueErrors (incl. ValidationError) as usage errors."""
    try:
        yield
    except ValueError as e:
        raise click.UsageError(str(e))


def _load_graph(path: Path) -> AssociationGraph:
    try:
        graph = AssociationGraph.model_validate_json(path.read_text(encoding="utf-8"))
    except (ValidationError, UnicodeDecodeError) as e:
        raise click.BadParameter(str(e), param_hint="GRAPH")
    logger.debug(f"Loaded {path}: {graph.num_nodes} nodes, {len(graph.associations)} associations")
    return graph


def _load_episodes(path: Path) -> list[list[int]]:
    try:
        return _EPISODES.validate_json(path.read_text(encoding="utf-8"))
    except (ValidationError, UnicodeDecodeError) as e:
        raise click.BadParameter(str(e), param_hint="EPISODES")


def _episode_links(episodes: list[list[int]]) -> list[list[TemporalLink]]:
    return [create_episode_links(episode) for episode in episodes]


_graph_argument = click.argument(
    "graph", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_episodes_argument = click.argument(
    "episodes", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


def _spreading_options(f):
    """Options shared by spread and top."""
    options = [
        click.option("--seed", "seeds", type=int, multiple=True, required=True,
                     help="Seed node index (repeatable)"),
        click.option("--activation", "activations", type=float, multiple=True,
                     help="Seed activation, matched to --seed by position (default 1.0)"),
        click.option("--depth", type=click.IntRange(min=0), help="Spreading rounds"),
        click.option("--decay", type=float, help="Decay per hop"),
        click.option("--min-activation", type=float, help="Propagation floor"),
        click.option("--max-nodes", type=int, help="Visitation budget"),
        click.option("--unidirectional", is_flag=True, help="Ignore backward links"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _run_spread(graph, seeds, activations, depth, decay, min_activation,
                max_nodes, unidirectional) -> SpreadingResult:
    overrides = {
        "decay_per_hop": decay,
        "minimum_activation": min_activation,
        "max_nodes": max_nodes,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if unidirectional:
        overrides["bidirectional"] = False
    g = _load_graph(graph)
    with _usage_errors():
        config = SpreadingConfig(**overrides)
        return spread_activation(
            g.num_nodes, g.associations, list(seeds), list(activations), config, depth
        )


# =============================================================================
# Root group
# =============================================================================

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose):
    """Lucid Core - associative memory activation engine."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    settings_mod.load_on_startup()


# =============================================================================
# Spreading
# =============================================================================

@cli.command()
@_graph_argument
@_spreading_options
@click.option("--top", "top_k", type=click.IntRange(min=0), help="Only list the K most activated nodes")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def spread(graph, seeds, activations, depth, decay, min_activation, max_nodes,
           unidirectional, top_k, as_json):
    """Spread activation from seed nodes."""
    result = _run_spread(graph, seeds, activations, depth, decay, min_activation,
                         max_nodes, unidirectional)

    if as_json:
        _json_out(result.model_dump())
        return

    click.echo("Spreading Activation")
    click.echo("=" * 40)
    for level, nodes in enumerate(result.visited_by_depth):
        click.echo(f"  Depth {level}: {', '.join(str(n) for n in nodes)}")

    click.echo(f"  Visited:  {result.total_visited} nodes in {result.depth_reached} hops")

    click.echo("\nActivations:")
    ranked = get_top_activated(result.activations, top_k if top_k is not None else len(result.activations))
    for idx in ranked:
        click.echo(f"  {idx:6d}  {result.activations[idx]:.6f}")


@cli.command()
@_graph_argument
@_spreading_options
@click.option("-k", "top_k", type=click.IntRange(min=0), help="Number of nodes to return")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def top(graph, seeds, activations, depth, decay, min_activation, max_nodes,
        unidirectional, top_k, as_json):
    """List the most activated nodes after spreading."""
    result = _run_spread(graph, seeds, activations, depth, decay, min_activation,
                         max_nodes, unidirectional)
    with _usage_errors():
        ranked = get_top_activated(result.activations, top_k)

    if as_json:
        _json_out([{"node": i, "activation": result.activations[i]} for i in ranked])
        return

    for i in ranked:
        click.echo(f"{i}\t{result.activations[i]:.6f}")


# =============================================================================
# Analytics
# =============================================================================

@cli.command()
@_graph_argument
@click.argument("source", type=int)
@click.argument("target", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def path(graph, source, target, as_json):
    """Shortest activation path from SOURCE to TARGET."""
    g = _load_graph(graph)
    with _usage_errors():
        nodes = find_activation_path(g.num_nodes, g.associations, source, target)

    if as_json:
        _json_out(nodes)
        return

    if not nodes:
        click.echo(f"No path from {source} to {target}")
        return
    click.echo(" -> ".join(str(n) for n in nodes))
    click.echo(f"({len(nodes) - 1} hops)")


@cli.command()
@_graph_argument
@click.option("--damping", type=click.FloatRange(0.0, 1.0), help="Damping factor")
@click.option("--iterations", type=click.IntRange(min=0), help="Power iterations")
@click.option("--top", "top_k", type=click.IntRange(min=0), help="Only list the K highest ranks")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def pagerank(graph, damping, iterations, top_k, as_json):
    """Rank nodes by PageRank importance."""
    g = _load_graph(graph)
    with _usage_errors():
        ranks = compute_pagerank(g.num_nodes, g.associations, damping, iterations)

    if as_json:
        _json_out(ranks)
        return

    with _usage_errors():
        ranked = get_top_activated(ranks, top_k if top_k is not None else len(ranks))
    click.echo("PageRank")
    click.echo("=" * 40)
    for idx in ranked:
        click.echo(f"  {idx:6d}  {ranks[idx]:.6f}")


# =============================================================================
# Temporal
# =============================================================================

@cli.command()
@click.argument("memories", type=int, nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def episode(memories, as_json):
    """Show the temporal links of an episode (MEMORIES in event order)."""
    with _usage_errors():
        links = create_episode_links(list(memories))

    if as_json:
        _json_out([link.model_dump() for link in links])
        return

    click.echo(f"Episode: {len(memories)} events, {len(links)} links")
    click.echo("=" * 40)
    for link in links:
        click.echo(
            f"  {link.source_memory} -> {link.target_memory}  "
            f"(distance {link.distance})  "
            f"fwd={link.forward_strength:.4f}  bwd={link.backward_strength:.4f}"
        )


@cli.command()
@_episodes_argument
@click.option("--seed", type=int, required=True, help="Seed memory index")
@click.option("--activation", type=float, default=1.0, show_default=True)
@click.option("--num-memories", type=click.IntRange(min=0),
              help="Memory count (default: largest index in EPISODES + 1)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def temporal(episodes, seed, activation, num_memories, as_json):
    """Spread activation from a seed memory across its episodes."""
    eps = _load_episodes(episodes)
    if num_memories is None:
        num_memories = max((m for ep in eps for m in ep), default=-1) + 1

    with _usage_errors():
        result = spread_temporal_activation_multi(num_memories, _episode_links(eps), seed, activation)

    if as_json:
        _json_out(result.model_dump())
        return

    click.echo(f"Temporal Activation from {seed}")
    click.echo("=" * 40)
    click.echo(f"  Forward:  {', '.join(str(m) for m in result.forward_activated) or '-'}")
    click.echo(f"  Backward: {', '.join(str(m) for m in result.backward_activated) or '-'}")
    click.echo("\nActivations:")
    for idx in get_top_activated(result.activations, len(result.activations)):
        click.echo(f"  {idx:6d}  {result.activations[idx]:.6f}")


@cli.command()
@_episodes_argument
@click.argument("anchor", type=int)
@click.option("--direction", default="both", show_default=True,
              type=click.Choice(["before", "backward", "after", "forward", "both"]))
@click.option("--limit", type=click.IntRange(min=0), help="Maximum neighbors")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def neighbors(episodes, anchor, direction, limit, as_json):
    """What came before/after ANCHOR in its episodes."""
    eps = _load_episodes(episodes)
    with _usage_errors():
        links = [link for ep_links in _episode_links(eps) for link in ep_links]
        found = find_temporal_neighbors(links, anchor, TemporalDirection.parse(direction), limit)

    if as_json:
        _json_out([{"memory": m, "strength": s} for m, s in found])
        return

    if not found:
        click.echo(f"No temporal neighbors for {anchor}")
        return
    for m, s in found:
        click.echo(f"{m}\t{s:.4f}")


# =============================================================================
# Settings
# =============================================================================

@cli.group()
def settings():
    """View or change persisted defaults."""
    pass


@settings.command("show")
@click.option("--dev", is_flag=True, help="Include advanced settings")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def settings_show(dev, as_json):
    """Show current settings."""
    current = settings_mod.get_current_settings(include_dev=dev)

    if as_json:
        _json_out(current)
        return

    for section, values in current.items():
        click.echo(f"[{section}]")
        for key, value in values.items():
            click.echo(f"  {key:22s} {value}")


@settings.command("set")
@click.argument("key")
@click.argument("value")
def settings_set(key, value):
    """Persist a setting, e.g. spreading.decay_per_hop 0.6"""
    section, sep, name = key.partition(".")
    if not sep or not name:
        raise click.BadParameter("expected SECTION.KEY", param_hint="KEY")

    applied = settings_mod.apply_settings({section: {name: value}})
    if key not in applied:
        raise click.BadParameter(f"unknown or invalid setting: {key}", param_hint="KEY")
    click.echo(f"{key} = {applied[key]}")


@settings.command("reset")
def settings_reset():
    """Restore default settings."""
    settings_mod.reset_settings()
    click.echo("Settings reset to defaults")


# =============================================================================
# Main entry point
# =============================================================================

def main():
    cli()


if __name__ == "__main__":
    main()
