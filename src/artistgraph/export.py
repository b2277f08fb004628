"""
export.py

Per-artist metrics table (always covers the FULL graph, not just the
rendered subgraph) plus the network summary.

Outputs:
- artist_metrics.csv: id, degree, component, community
- network_summary.json
"""

from __future__ import annotations

import json
import os
from typing import Dict

import networkx as nx
import pandas as pd


METRIC_COLUMNS = ["id", "degree", "component", "community"]


def build_metrics_table(G: nx.Graph) -> pd.DataFrame:
    """
    One row per artist in node order (= cleaned node table order),
    so re-runs on the same input diff cleanly.
    """
    rows = [
        {
            "id": node,
            "degree": attrs["degree"],
            "component": attrs["component"],
            "community": attrs["community"],
        }
        for node, attrs in G.nodes(data=True)
    ]
    return pd.DataFrame(rows, columns=METRIC_COLUMNS)


def top_by_degree(metrics_df: pd.DataFrame, k: int = 10) -> pd.DataFrame:
    """
    Most connected artists. Ties keep table order. Returns a new frame;
    metrics_df is not touched.
    """
    ranked = metrics_df.sort_values("degree", ascending=False, kind="stable")
    return ranked.head(k).reset_index(drop=True)


def write_metrics_csv(metrics_df: pd.DataFrame, path: str) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    metrics_df.to_csv(path, index=False)
    return path


def write_summary_json(summary: Dict, path: str) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w") as f:
        json.dump(summary, f, indent=2)
    return path
