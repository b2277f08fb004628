"""
subgraph.py

Pick which artists to draw. Large networks are unreadable as a hairball,
so the visualization only shows well-connected artists:

1. H = artists with degree >= min_degree
2. |H| > max_nodes  -> the max_nodes highest-degree artists
3. H not empty      -> all of H
4. H empty          -> a random sample of min(sample_size, |V|) artists

Ties at the max_nodes cut are broken by node order (stable sort), so the same
input always renders the same set. Step 4 is the only random step; pass a
seeded random.Random to make it repeatable.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx

from artistgraph.config import DEFAULT_MAX_NODES, DEFAULT_MIN_DEGREE, DEFAULT_SAMPLE_SIZE


TOP_DEGREE = "top_degree"
THRESHOLD = "threshold"
RANDOM_SAMPLE = "random_sample"


@dataclass(frozen=True)
class NodeSelection:
    nodes: Tuple[Hashable, ...]
    strategy: str
    threshold_count: int  # |H|, artists meeting min_degree

    def describe(self) -> str:
        if self.strategy == TOP_DEGREE:
            return f"Using top {len(self.nodes)} nodes by degree"
        if self.strategy == RANDOM_SAMPLE:
            return f"Using random sample of {len(self.nodes)} nodes"
        return f"Using all {len(self.nodes)} nodes at or above the degree threshold"


def _node_degrees(G: nx.Graph) -> Dict[Hashable, int]:
    # Prefer the annotation from analyze.annotate_graph when present
    return {
        node: attrs["degree"] if "degree" in attrs else G.degree(node)
        for node, attrs in G.nodes(data=True)
    }


def select_nodes(
    G: nx.Graph,
    min_degree: int = DEFAULT_MIN_DEGREE,
    max_nodes: int = DEFAULT_MAX_NODES,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    rng: Optional[random.Random] = None,
) -> NodeSelection:
    for name, value in (("min_degree", min_degree), ("max_nodes", max_nodes), ("sample_size", sample_size)):
        if value < 0:
            raise ValueError(f"{name} must be >= 0 (got {value})")

    degrees = _node_degrees(G)
    order: List[Hashable] = list(G.nodes)

    high_degree = [n for n in order if degrees[n] >= min_degree]

    if len(high_degree) > max_nodes:
        # sorted() is stable: equal degrees keep node order
        ranked = sorted(high_degree, key=lambda n: degrees[n], reverse=True)
        return NodeSelection(tuple(ranked[:max_nodes]), TOP_DEGREE, len(high_degree))

    if high_degree:
        return NodeSelection(tuple(high_degree), THRESHOLD, len(high_degree))

    rng = rng or random.Random()
    k = min(sample_size, len(order))
    sampled = set(rng.sample(order, k))
    return NodeSelection(tuple(n for n in order if n in sampled), RANDOM_SAMPLE, 0)


def induced_subgraph(G: nx.Graph, nodes) -> nx.Graph:
    """
    Independent copy of the subgraph on `nodes`: every edge with both ends
    selected, attributes unchanged. G is not modified.
    Node order follows G (G.subgraph() would follow set order).
    """
    keep = set(nodes)

    sub = G.__class__()
    sub.graph.update(G.graph)
    sub.add_nodes_from((n, dict(attrs)) for n, attrs in G.nodes(data=True) if n in keep)

    if G.is_multigraph():
        sub.add_edges_from(
            (u, v, k, dict(d))
            for u, v, k, d in G.edges(keys=True, data=True)
            if u in keep and v in keep
        )
    else:
        sub.add_edges_from(
            (u, v, dict(d))
            for u, v, d in G.edges(data=True)
            if u in keep and v in keep
        )

    return sub


def select_subgraph(
    G: nx.Graph,
    min_degree: int = DEFAULT_MIN_DEGREE,
    max_nodes: int = DEFAULT_MAX_NODES,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    rng: Optional[random.Random] = None,
) -> Tuple[NodeSelection, nx.Graph]:
    selection = select_nodes(
        G,
        min_degree=min_degree,
        max_nodes=max_nodes,
        sample_size=sample_size,
        rng=rng,
    )
    return selection, induced_subgraph(G, selection.nodes)
