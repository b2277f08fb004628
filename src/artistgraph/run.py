"""
run.py

One-command runner for ArtistGraph:
load -> clean -> build graph -> metrics -> select subgraph -> render -> export

Examples:
  artistgraph --nodes data/nodes.csv --edges data/edges.csv --output-dir outputs
  artistgraph --nodes nodes.csv --edges edges.csv --min-degree 5 --seed 123
"""

from __future__ import annotations

import argparse
import os
import random
from dataclasses import dataclass
from typing import Dict, Optional

import networkx as nx
import pandas as pd

from artistgraph.analyze import (
    CommunityDetector,
    annotate_graph,
    build_graph,
    compute_summary_stats,
    make_louvain_detector,
)
from artistgraph.clean import EdgeCleaningReport, NodeCleaningReport, dedupe_nodes, filter_edges
from artistgraph.config import PipelineConfig
from artistgraph.console import done, status
from artistgraph.export import (
    build_metrics_table,
    top_by_degree,
    write_metrics_csv,
    write_summary_json,
)
from artistgraph.subgraph import NodeSelection, select_subgraph
from artistgraph.tables import load_tables
from artistgraph.visualize import (
    spring_layout,
    write_community_png,
    write_pyvis_html,
    write_simple_png,
)


@dataclass
class PipelineResult:
    nodes: pd.DataFrame
    edges: pd.DataFrame
    node_report: NodeCleaningReport
    edge_report: EdgeCleaningReport
    graph: nx.MultiGraph  # annotated full graph
    selection: NodeSelection
    subgraph: nx.MultiGraph
    metrics: pd.DataFrame
    summary: Dict


def run_pipeline(
    nodes_df: pd.DataFrame,
    edges_df: pd.DataFrame,
    config: Optional[PipelineConfig] = None,
    rng: Optional[random.Random] = None,
    detect_communities: Optional[CommunityDetector] = None,
) -> PipelineResult:
    """
    Run every analysis stage on in-memory tables (no files written).
    `config.seed` seeds both the community detector and the fallback sampler
    unless `detect_communities` / `rng` are passed explicitly.
    """
    config = config or PipelineConfig()
    rng = rng or random.Random(config.seed)
    detect_communities = detect_communities or make_louvain_detector(
        seed=config.seed,
        resolution=config.resolution,
    )

    status("Cleaning node table…")
    nodes_clean, node_report = dedupe_nodes(nodes_df)

    status("Cleaning edge table…")
    edges_clean, edge_report = filter_edges(edges_df, nodes_clean[node_report.id_column])

    status("Creating graph object…")
    G = build_graph(nodes_clean, edges_clean)
    done(f"Graph created: nodes={G.number_of_nodes()}, edges={G.number_of_edges()}")

    status("Calculating degree, components and communities…")
    annotated = annotate_graph(G, detect_communities=detect_communities)
    summary = compute_summary_stats(annotated)
    done(
        f"Network summary: nodes={summary['num_nodes']}, edges={summary['num_edges']}, "
        f"communities={summary['num_communities']}, "
        f"average degree={summary['average_degree']:.2f}"
    )

    status(f"Selecting subgraph (degree >= {config.min_degree}, cap={config.max_nodes})…")
    selection, subgraph = select_subgraph(
        annotated,
        min_degree=config.min_degree,
        max_nodes=config.max_nodes,
        sample_size=config.sample_size,
        rng=rng,
    )
    print(f"Nodes meeting the degree threshold: {selection.threshold_count}")
    done(selection.describe())

    metrics = build_metrics_table(annotated)

    return PipelineResult(
        nodes=nodes_clean,
        edges=edges_clean,
        node_report=node_report,
        edge_report=edge_report,
        graph=annotated,
        selection=selection,
        subgraph=subgraph,
        metrics=metrics,
        summary=summary,
    )


def parse_args(argv=None) -> argparse.Namespace:
    env_config = PipelineConfig.from_env()

    parser = argparse.ArgumentParser(description="ArtistGraph: clean, analyze and visualize an artist network")
    parser.add_argument("--nodes", required=True, help="Path to nodes.csv (first column = artist id)")
    parser.add_argument("--edges", required=True, help="Path to edges.csv (first two columns = source/target ids)")
    parser.add_argument("--output-dir", default="outputs", help="Where metrics, summary and images are written")

    # Keep these configurable but with safe defaults (env vars override the built-ins)
    parser.add_argument("--min-degree", type=int, default=env_config.min_degree)
    parser.add_argument("--max-nodes", type=int, default=env_config.max_nodes)
    parser.add_argument("--sample-size", type=int, default=env_config.sample_size)
    parser.add_argument("--top-k", type=int, default=env_config.top_k)
    parser.add_argument("--seed", type=int, default=env_config.seed, help="Seed for sampling + community detection")
    parser.add_argument("--resolution", type=float, default=env_config.resolution)
    parser.add_argument("--no-render", action="store_true", help="Skip PNG/HTML output")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = PipelineConfig(
        min_degree=args.min_degree,
        max_nodes=args.max_nodes,
        sample_size=args.sample_size,
        top_k=args.top_k,
        seed=args.seed,
        resolution=args.resolution,
    )

    status("Loading tables…")
    nodes_df, edges_df = load_tables(args.nodes, args.edges)
    done(f"Loaded {len(nodes_df)} node rows and {len(edges_df)} edge rows")

    result = run_pipeline(nodes_df, edges_df, config)

    os.makedirs(args.output_dir, exist_ok=True)
    written = []

    if not args.no_render:
        status("Creating visualizations…")
        pos = spring_layout(result.subgraph, seed=config.seed if config.seed is not None else 42)
        written.append(write_community_png(result.subgraph, args.output_dir, pos=pos))
        written.append(write_simple_png(result.subgraph, args.output_dir, pos=pos))
        written.append(write_pyvis_html(result.subgraph, args.output_dir))

    status("Exporting results…")
    written.append(write_metrics_csv(result.metrics, os.path.join(args.output_dir, "artist_metrics.csv")))
    written.append(write_summary_json(result.summary, os.path.join(args.output_dir, "network_summary.json")))

    print(f"\n=== TOP {config.top_k} MOST CONNECTED ARTISTS ===")
    print(top_by_degree(result.metrics, k=config.top_k).to_string(index=False))

    print("\nOutputs written:")
    for path in written:
        print(f"- {path}")
    print("\nDone.")
    return result


if __name__ == "__main__":
    main()
