"""
visualize.py

Draw the selected artist subgraph:
- network.png: node size = degree, node color = community
- network_simple.png: node size = degree, single color
- network.html: interactive PyVis view with degree/component/community tooltips

Both PNGs share one force-directed layout so they can be compared side by side.
The layout is a plain function (graph in, positions out) so callers can swap it.
"""

from __future__ import annotations

import os
from typing import Callable, Dict, Hashable, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.colors import to_hex
from pyvis.network import Network

THEME = {
    "bg": "#121212",
    "text": "#FFFFFF",
    "simple_node": "#4682B4",  # steelblue
    "node_border": "#121212",
    "edge": "#ACADAC",         # light gray
    "edge_rgb": (172, 173, 172),
    "palette": "tab20",        # community colors
}

# Graph in, {node: (x, y)} out.
LayoutFn = Callable[[nx.Graph], Dict[Hashable, Tuple[float, float]]]


def spring_layout(G: nx.Graph, seed: int = 42) -> Dict[Hashable, Tuple[float, float]]:
    """
    Fruchterman-Reingold force-directed layout, deterministic for a fixed seed.
    """
    return nx.spring_layout(G, seed=seed, k=0.6)


def safe_matplotlib_label(text) -> str:
    """
    Matplotlib treats '$' as math-mode. Escape it so artist names render safely.
    """
    if text is None:
        return ""
    return str(text).replace("$", r"\$")


def degree_to_node_size(degree: float, max_degree: float) -> float:
    """
    Map degree to a node size in 10..50 relative to the busiest artist.
    We keep a minimum so low-degree artists are still visible.
    """
    if max_degree <= 0:
        return 10.0
    d = max(0.0, min(float(degree), float(max_degree)))
    return 10 + 40 * (d / max_degree)


def community_color(community: Optional[int]) -> str:
    if community is None:
        return THEME["simple_node"]
    cmap = plt.get_cmap(THEME["palette"])
    return to_hex(cmap((int(community) - 1) % cmap.N))


def _degree(G: nx.Graph, node: Hashable) -> int:
    return G.nodes[node].get("degree", G.degree(node))


def _label_subset(G: nx.Graph, top_n: int = 15) -> Dict[Hashable, str]:
    # Label only the top-degree artists to keep it readable
    ranked = sorted(G.nodes, key=lambda n: _degree(G, n), reverse=True)[:top_n]
    return {n: safe_matplotlib_label(G.nodes[n].get("name", n)) for n in ranked}


def _draw_png(
    G: nx.Graph,
    pos: Dict,
    out_path: str,
    node_colors,
    title: str,
    subtitle: Optional[str] = None,
) -> str:
    max_degree = max((_degree(G, n) for n in G.nodes), default=0)
    sizes = [degree_to_node_size(_degree(G, n), max_degree) * 20 for n in G.nodes]  # scale for matplotlib

    plt.figure(figsize=(18, 12), dpi=200)
    ax = plt.gca()
    ax.set_facecolor(THEME["bg"])
    plt.gcf().patch.set_facecolor(THEME["bg"])

    if G.number_of_edges():
        nx.draw_networkx_edges(G, pos, width=0.5, alpha=0.2, edge_color=THEME["edge"])
    if G.number_of_nodes():
        nx.draw_networkx_nodes(
            G,
            pos,
            node_size=sizes,
            node_color=node_colors,
            alpha=0.7,
            linewidths=1.0,
            edgecolors=THEME["node_border"],
        )
        nx.draw_networkx_labels(G, pos, labels=_label_subset(G), font_size=8, font_color=THEME["text"])

    heading = title if not subtitle else f"{title}\n{subtitle}"
    plt.title(heading, color=THEME["text"])
    plt.axis("off")
    plt.tight_layout()
    plt.savefig(out_path, facecolor=THEME["bg"])
    plt.close()
    return out_path


def write_community_png(
    G: nx.Graph,
    out_dir: str,
    pos: Optional[Dict] = None,
    filename: str = "network.png",
    layout: LayoutFn = spring_layout,
) -> str:
    """
    Main plot: size by degree, color by community.
    `layout` is only called when no precomputed `pos` is given.
    """
    pos = pos if pos is not None else layout(G)
    colors = [community_color(G.nodes[n].get("community")) for n in G.nodes]
    return _draw_png(
        G,
        pos,
        os.path.join(out_dir, filename),
        node_colors=colors,
        title="Spotify Artist Network",
        subtitle=f"Showing {G.number_of_nodes()} most connected artists",
    )


def write_simple_png(
    G: nx.Graph,
    out_dir: str,
    pos: Optional[Dict] = None,
    filename: str = "network_simple.png",
    layout: LayoutFn = spring_layout,
) -> str:
    pos = pos if pos is not None else layout(G)
    return _draw_png(
        G,
        pos,
        os.path.join(out_dir, filename),
        node_colors=THEME["simple_node"],
        title="Spotify Artist Network (Simple Version)",
    )


def write_pyvis_html(G: nx.Graph, out_dir: str, filename: str = "network.html") -> str:
    """
    Interactive HTML graph.
    Parallel connections collapse into one drawn edge whose width grows with the count.
    """
    net = Network(
        height="800px",
        width="100%",
        bgcolor=THEME["bg"],
        font_color=THEME["text"],
        cdn_resources="remote",
    )

    # Physics makes it readable; users can drag nodes around.
    net.force_atlas_2based()

    max_degree = max((_degree(G, n) for n in G.nodes), default=0)
    for node_id, attrs in G.nodes(data=True):
        degree = _degree(G, node_id)
        net.add_node(
            str(node_id),
            label=str(attrs.get("name", node_id)),
            title=(
                f"{attrs.get('name', node_id)}\n"
                f"Degree: {degree}\n"
                f"Component: {attrs.get('component', '')}\n"
                f"Community: {attrs.get('community', '')}"
            ),
            size=degree_to_node_size(degree, max_degree),
            color=community_color(attrs.get("community")),
        )

    # canonical (u, v) -> number of parallel connections
    multiplicity: Dict[Tuple[str, str], int] = {}
    for u, v in G.edges():
        a, b = str(u), str(v)
        key = (a, b) if a <= b else (b, a)
        multiplicity[key] = multiplicity.get(key, 0) + 1

    r, g, b = THEME["edge_rgb"]
    for (u, v), count in multiplicity.items():
        net.add_edge(
            u,
            v,
            title=f"Connections: {count}",
            width=min(20.0, 1.0 + count * 0.5),
            color=f"rgba({r}, {g}, {b}, 0.35)",
        )

    out_path = os.path.join(out_dir, filename)
    net.write_html(out_path)
    return out_path
