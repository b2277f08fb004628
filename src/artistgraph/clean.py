"""
clean.py

Clean the raw tables before building the graph:
- drop duplicate artist rows (keep the first occurrence of each id)
- drop connections that point at artists missing from the node table

Neither step is an error condition. Scraped/exported artist data is noisy,
so both steps just clean and print what they removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import pandas as pd

from artistgraph.console import done, warn
from artistgraph.tables import edge_id_columns, node_id_column


# ----------------------------
# Reports
# ----------------------------

@dataclass(frozen=True)
class NodeCleaningReport:
    id_column: str
    total_rows: int
    unique_ids: int
    retained_rows: int
    blank_ids: int = 0  # rows dropped for an empty/missing id

    @property
    def dropped_rows(self) -> int:
        return self.total_rows - self.retained_rows


@dataclass(frozen=True)
class EdgeCleaningReport:
    edges_before: int
    edges_after: int
    missing_ids: Tuple[str, ...]  # edge-referenced ids with no node row, sources first, then targets
    blank_endpoint_edges: int = 0  # edges dropped for an empty/missing endpoint

    @property
    def dropped_edges(self) -> int:
        return self.edges_before - self.edges_after


# ----------------------------
# Blank identifiers
# ----------------------------

def _is_blank(value) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def blank_id_mask(ids: pd.Series) -> pd.Series:
    """True where an id is NaN/None or an empty (whitespace-only) string."""
    return ids.map(_is_blank).astype(bool)


# ----------------------------
# Node deduplication
# ----------------------------

def dedupe_nodes(
    nodes_df: pd.DataFrame,
    id_column: Optional[str] = None,
) -> Tuple[pd.DataFrame, NodeCleaningReport]:
    """
    Keep exactly the first row for every distinct artist id, in input order.
    The id column defaults to the first column of the table.
    Rows with a blank id are dropped and counted, never kept as a node.
    """
    id_column = id_column or node_id_column(nodes_df)

    ids = nodes_df[id_column]
    blank = blank_id_mask(ids)

    keep = ~blank & ~ids.duplicated(keep="first")
    cleaned = nodes_df[keep].reset_index(drop=True)

    report = NodeCleaningReport(
        id_column=id_column,
        total_rows=len(nodes_df),
        unique_ids=int(ids[~blank].nunique()),
        retained_rows=len(cleaned),
        blank_ids=int(blank.sum()),
    )

    if report.blank_ids:
        warn(f"Node rows with a blank id (dropped): {report.blank_ids}")
    done(
        f"Nodes: total={report.total_rows}, unique={report.unique_ids}, "
        f"after removing duplicates={report.retained_rows}"
    )
    return cleaned, report


# ----------------------------
# Edge integrity
# ----------------------------

def filter_edges(
    edges_df: pd.DataFrame,
    node_ids: Iterable[str],
) -> Tuple[pd.DataFrame, EdgeCleaningReport]:
    """
    Keep a connection only if both endpoints are known artists.
    Surviving rows keep their input order. A self-loop survives
    when its single endpoint is known. Edges with a blank endpoint
    are dropped and counted separately from missing ids.
    """
    known = {i for i in node_ids if not _is_blank(i)}
    source_col, target_col = edge_id_columns(edges_df)

    sources = edges_df[source_col]
    targets = edges_df[target_col]

    blank = blank_id_mask(sources) | blank_id_mask(targets)

    # Distinct ids mentioned by any edge: sources first, then targets
    edge_ids = list(dict.fromkeys(pd.concat([sources, targets], ignore_index=True).tolist()))
    missing_ids = tuple(i for i in edge_ids if not _is_blank(i) and i not in known)

    keep = ~blank & sources.isin(known) & targets.isin(known)
    cleaned = edges_df[keep].reset_index(drop=True)

    report = EdgeCleaningReport(
        edges_before=len(edges_df),
        edges_after=len(cleaned),
        missing_ids=missing_ids,
        blank_endpoint_edges=int(blank.sum()),
    )

    if report.blank_endpoint_edges:
        warn(f"Edges with a blank endpoint (dropped): {report.blank_endpoint_edges}")
    if report.missing_ids:
        warn(f"Artists in edges but not in nodes: {len(report.missing_ids)}")
    done(f"Edges before filtering: {report.edges_before}, after filtering: {report.edges_after}")
    return cleaned, report
