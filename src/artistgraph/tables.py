"""
tables.py

Load the raw artist (node) and connection (edge) tables.

Conventions (no other schema is enforced):
- nodes.csv: first column = artist identifier, any other columns are attributes
- edges.csv: first two columns = source / target identifiers, rest are attributes

Identifier columns are always read as strings so "007" and "7" stay distinct.
"""

from __future__ import annotations

import os
from typing import Tuple

import pandas as pd


class MissingColumnsError(ValueError):
    """Raised when a table does not have its identifier column(s)."""


def node_id_column(nodes_df: pd.DataFrame) -> str:
    if len(nodes_df.columns) < 1:
        raise MissingColumnsError("Node table needs at least one column (the artist identifier).")
    return nodes_df.columns[0]


def edge_id_columns(edges_df: pd.DataFrame) -> Tuple[str, str]:
    if len(edges_df.columns) < 2:
        raise MissingColumnsError(
            "Edge table needs at least two columns (source and target identifiers)."
        )
    return edges_df.columns[0], edges_df.columns[1]


def _read_with_string_ids(path: str, n_id_columns: int) -> pd.DataFrame:
    header = pd.read_csv(path, nrows=0)
    id_cols = list(header.columns[:n_id_columns])
    return pd.read_csv(path, dtype={c: str for c in id_cols})


def load_tables(nodes_path: str, edges_path: str) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Read both tables. Any failure here is fatal for the run:
    missing files raise FileNotFoundError, missing identifier columns raise
    MissingColumnsError, and pandas parse errors propagate unchanged.
    """
    for path in (nodes_path, edges_path):
        if not os.path.exists(path):
            raise FileNotFoundError(f"Input table not found: {path}")

    nodes_df = _read_with_string_ids(nodes_path, 1)
    edges_df = _read_with_string_ids(edges_path, 2)

    node_id_column(nodes_df)
    edge_id_columns(edges_df)

    return nodes_df, edges_df
