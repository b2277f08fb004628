"""
analyze.py

Build the artist connection graph from the cleaned tables and annotate
every artist with:
- degree (number of connection endpoints)
- component (connected-component label, 1..k)
- community (modularity community label, 1..k)

Graph conventions:
- undirected networkx.MultiGraph: parallel connections and self-loops are kept
  exactly as they appear in the edge table
- a self-loop adds 2 to its artist's degree (networkx convention), so the
  degree sum is always 2 * number of edges
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Set

import networkx as nx
import pandas as pd

from artistgraph.tables import edge_id_columns, node_id_column


# Graph in, {node: community label} out.
CommunityDetector = Callable[[nx.Graph], Dict[Hashable, int]]


# ----------------------------
# Graph construction
# ----------------------------

def _attr_records(df: pd.DataFrame, skip: Iterable[str]) -> List[Dict]:
    # Column-wise, so numeric tables keep their dtypes (iterrows upcasts a row to float)
    attrs = df.drop(columns=list(skip))
    if attrs.columns.empty:
        return [{} for _ in range(len(df))]
    return attrs.to_dict("records")


def build_graph(nodes_df: pd.DataFrame, edges_df: pd.DataFrame) -> nx.MultiGraph:
    """
    Build an undirected multigraph from cleaned tables.
    Node insertion order follows the node table; extra columns become attributes.
    """
    id_col = node_id_column(nodes_df)
    source_col, target_col = edge_id_columns(edges_df)

    G = nx.MultiGraph()

    # (node, attrs) / (u, v, attrs) tuples so a column named "key" stays a plain attribute
    G.add_nodes_from(
        zip(nodes_df[id_col].tolist(), _attr_records(nodes_df, [id_col]))
    )
    G.add_edges_from(
        zip(
            edges_df[source_col].tolist(),
            edges_df[target_col].tolist(),
            _attr_records(edges_df, [source_col, target_col]),
        )
    )

    return G


# ----------------------------
# Components + communities
# ----------------------------

def _number_groups(groups: Iterable[Set[Hashable]]) -> Dict[Hashable, int]:
    return {node: label for label, group in enumerate(groups, start=1) for node in group}


def component_labels(G: nx.Graph) -> Dict[Hashable, int]:
    """
    Connected-component label per node, numbered 1..k in order of each
    component's first node. Isolated nodes get their own label.
    """
    # connected_components walks nodes in insertion order, so labels are stable
    return _number_groups(nx.connected_components(G))


def louvain_partition(
    G: nx.Graph,
    seed: Optional[int] = None,
    resolution: float = 1.0,
    weight: Optional[str] = "weight",
) -> Dict[Hashable, int]:
    """
    Louvain modularity communities, numbered 1..k by descending size.
    Equal-size communities are ordered by their earliest member.
    Edges without a `weight` attribute count as weight 1.
    """
    if G.number_of_nodes() == 0:
        return {}

    if G.number_of_edges() == 0:
        communities: List[Set[Hashable]] = [{node} for node in G.nodes]
    else:
        communities = nx.community.louvain_communities(
            G,
            weight=weight,
            resolution=resolution,
            seed=seed,
        )

    position = {node: i for i, node in enumerate(G.nodes)}
    ordered = sorted(
        communities,
        key=lambda c: (-len(c), min(position[n] for n in c)),
    )
    return _number_groups(ordered)


def make_louvain_detector(seed: Optional[int] = None, resolution: float = 1.0) -> CommunityDetector:
    def detect(G: nx.Graph) -> Dict[Hashable, int]:
        return louvain_partition(G, seed=seed, resolution=resolution)

    return detect


# ----------------------------
# Annotation
# ----------------------------

def annotate_graph(
    G: nx.MultiGraph,
    detect_communities: Optional[CommunityDetector] = None,
) -> nx.MultiGraph:
    """
    Return a copy of G with degree / component / community node attributes.
    All three are computed on the full graph. G itself is left untouched.
    Failures inside the community detector propagate to the caller.
    """
    detect_communities = detect_communities or louvain_partition

    degrees = dict(G.degree())
    components = component_labels(G)
    communities = detect_communities(G)

    missing = [n for n in G.nodes if n not in communities]
    if missing:
        raise ValueError(
            f"Community detector returned no label for {len(missing)} node(s), e.g. {missing[0]!r}"
        )

    annotated = G.copy()
    for node in annotated.nodes:
        annotated.nodes[node]["degree"] = degrees[node]
        annotated.nodes[node]["component"] = components[node]
        annotated.nodes[node]["community"] = int(communities[node])

    return annotated


# ----------------------------
# Summary stats
# ----------------------------

def compute_summary_stats(G: nx.Graph) -> Dict:
    degrees = dict(G.degree())

    components = sorted(
        (len(c) for c in nx.connected_components(G)),
        reverse=True,
    )
    communities = {c for _, c in G.nodes(data="community") if c is not None}

    return {
        "num_nodes": G.number_of_nodes(),
        "num_edges": G.number_of_edges(),
        "density": nx.density(G),
        "num_connected_components": len(components),
        "largest_component_size": components[0] if components else 0,
        "num_communities": len(communities),
        "average_degree": sum(degrees.values()) / max(len(degrees), 1),
    }
