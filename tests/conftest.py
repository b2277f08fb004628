import matplotlib

matplotlib.use("Agg")

import networkx as nx
import pandas as pd
import pytest

from artistgraph.analyze import component_labels


@pytest.fixture
def raw_nodes():
    """Four artists, A listed twice (second row has a different name)."""
    return pd.DataFrame(
        {
            "artist_id": ["A", "B", "A", "C", "D"],
            "name": ["Alpha", "Bravo", "Alpha (dup)", "Charlie", "Delta"],
        }
    )


@pytest.fixture
def raw_edges():
    """X is not a known artist."""
    return pd.DataFrame(
        {
            "source_artist_id": ["A", "A", "X"],
            "target_artist_id": ["B", "C", "D"],
            "weight": [3, 1, 2],
        }
    )


@pytest.fixture
def component_detector():
    """Deterministic stand-in for Louvain: one community per component."""
    return component_labels


@pytest.fixture
def degree_graph():
    """
    Factory: nodes n0, n1, ... carrying a precomputed `degree` attribute,
    the way annotate_graph leaves them.
    """
    def make(degrees):
        G = nx.MultiGraph()
        for i, d in enumerate(degrees):
            G.add_node(f"n{i}", degree=d)
        return G

    return make
