"""
Subgraph selection tests: threshold, hard cap, random fallback, induced subgraph.
"""

import random

import networkx as nx
import pytest

from artistgraph.subgraph import (
    RANDOM_SAMPLE,
    THRESHOLD,
    TOP_DEGREE,
    induced_subgraph,
    select_nodes,
    select_subgraph,
)


class TestSelectNodes:

    def test_threshold_selects_exactly_h(self, degree_graph):
        G = degree_graph([5, 4, 3, 1, 0])
        selection = select_nodes(G, min_degree=3, max_nodes=1000)

        assert selection.nodes == ("n0", "n1", "n2")
        assert selection.strategy == THRESHOLD
        assert selection.threshold_count == 3

    def test_cap_takes_highest_degrees(self, degree_graph):
        G = degree_graph([8, 10, 6, 9, 7])
        selection = select_nodes(G, min_degree=3, max_nodes=2)

        assert selection.nodes == ("n1", "n3")
        assert selection.strategy == TOP_DEGREE
        assert selection.threshold_count == 5

    def test_cap_ties_follow_node_order(self, degree_graph):
        G = degree_graph([4, 5, 4, 4, 5])
        selection = select_nodes(G, min_degree=3, max_nodes=3)

        assert selection.nodes == ("n1", "n4", "n0")

    def test_cap_members_dominate_rest_of_h(self, degree_graph):
        degrees = [3, 7, 7, 12, 4, 9, 3, 7, 5]
        G = degree_graph(degrees)
        selection = select_nodes(G, min_degree=3, max_nodes=4)

        assert len(selection.nodes) == 4
        kept = [G.nodes[n]["degree"] for n in selection.nodes]
        dropped = [G.nodes[n]["degree"] for n in G.nodes if n not in selection.nodes]
        assert min(kept) >= max(dropped)

    def test_h_equal_to_cap_is_not_truncated(self, degree_graph):
        G = degree_graph([3, 3, 1])
        selection = select_nodes(G, min_degree=3, max_nodes=2)

        assert selection.nodes == ("n0", "n1")
        assert selection.strategy == THRESHOLD

    def test_fallback_sample_capped_at_node_count(self, degree_graph):
        G = degree_graph([1] * 200)
        selection = select_nodes(G, min_degree=100, sample_size=500, rng=random.Random(0))

        assert selection.strategy == RANDOM_SAMPLE
        assert selection.threshold_count == 0
        assert set(selection.nodes) == set(G.nodes)

    def test_fallback_sample_is_seedable(self, degree_graph):
        G = degree_graph([0] * 50)
        first = select_nodes(G, min_degree=3, sample_size=10, rng=random.Random(42))
        second = select_nodes(G, min_degree=3, sample_size=10, rng=random.Random(42))

        expected = set(random.Random(42).sample(list(G.nodes), 10))
        assert first.nodes == second.nodes
        assert set(first.nodes) == expected
        # returned in node order
        assert list(first.nodes) == [n for n in G.nodes if n in expected]

    def test_empty_graph(self):
        selection = select_nodes(nx.MultiGraph())

        assert selection.nodes == ()
        assert selection.strategy == RANDOM_SAMPLE

    def test_uses_live_degree_without_annotation(self):
        G = nx.MultiGraph()
        G.add_edges_from([("hub", "a"), ("hub", "b"), ("hub", "c"), ("a", "b")])
        selection = select_nodes(G, min_degree=3)

        assert selection.nodes == ("hub",)

    def test_negative_parameters_rejected(self, degree_graph):
        with pytest.raises(ValueError):
            select_nodes(degree_graph([1]), max_nodes=-1)

    def test_describe(self, degree_graph):
        selection = select_nodes(degree_graph([10, 9, 8]), min_degree=3, max_nodes=2)
        assert selection.describe() == "Using top 2 nodes by degree"


class TestInducedSubgraph:

    def test_keeps_edges_between_selected_only(self):
        G = nx.MultiGraph()
        G.add_node("a", name="Alpha", community=1)
        G.add_edges_from([("a", "b"), ("a", "b"), ("b", "c"), ("a", "a")], weight=2)

        sub = induced_subgraph(G, ["b", "a"])

        assert list(sub.nodes) == ["a", "b"]
        assert sub.number_of_edges("a", "b") == 2
        assert nx.number_of_selfloops(sub) == 1
        assert not sub.has_node("c")
        assert sub.nodes["a"]["name"] == "Alpha"
        assert all(d["weight"] == 2 for _, _, d in sub.edges(data=True))

    def test_source_graph_untouched(self):
        G = nx.MultiGraph([("a", "b"), ("b", "c")])
        sub = induced_subgraph(G, ["a", "b"])
        sub.add_node("z")
        sub.nodes["a"]["tag"] = 1

        assert G.number_of_nodes() == 3
        assert "tag" not in G.nodes["a"]

    def test_simple_graph(self):
        G = nx.Graph([("a", "b"), ("b", "c")])
        sub = induced_subgraph(G, {"b", "c"})

        assert isinstance(sub, nx.Graph)
        assert list(sub.edges) == [("b", "c")]

    def test_select_subgraph(self, degree_graph):
        G = degree_graph([5, 4, 3, 1, 0])
        G.add_edges_from([("n0", "n1"), ("n1", "n3")])

        selection, sub = select_subgraph(G, min_degree=3)

        assert set(sub.nodes) == set(selection.nodes) == {"n0", "n1", "n2"}
        assert list(sub.edges()) == [("n0", "n1")]
