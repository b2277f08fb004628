"""
Config + table loading tests.
"""

import os

import pytest

from artistgraph.config import PipelineConfig
from artistgraph.tables import MissingColumnsError, load_tables


class TestPipelineConfig:

    def test_defaults(self):
        config = PipelineConfig()
        assert config.min_degree == 3
        assert config.max_nodes == 1000
        assert config.sample_size == 500
        assert config.top_k == 10
        assert config.seed is None

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            PipelineConfig(max_nodes=-5)
        with pytest.raises(ValueError):
            PipelineConfig(resolution=0)

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ARTISTGRAPH_MIN_DEGREE", "5")
        monkeypatch.setenv("ARTISTGRAPH_SEED", "123")
        monkeypatch.delenv("ARTISTGRAPH_MAX_NODES", raising=False)

        config = PipelineConfig.from_env(env_file=str(tmp_path / "missing.env"))

        assert config.min_degree == 5
        assert config.seed == 123
        assert config.max_nodes == 1000

    def test_from_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ARTISTGRAPH_TOP_K", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ARTISTGRAPH_TOP_K=20\n")

        try:
            config = PipelineConfig.from_env(env_file=str(env_file))
        finally:
            os.environ.pop("ARTISTGRAPH_TOP_K", None)

        assert config.top_k == 20

    def test_bad_env_value(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ARTISTGRAPH_SAMPLE_SIZE", "lots")
        with pytest.raises(ValueError, match="ARTISTGRAPH_SAMPLE_SIZE"):
            PipelineConfig.from_env(env_file=str(tmp_path / "missing.env"))


class TestLoadTables:

    def test_ids_read_as_strings(self, tmp_path):
        nodes_path = tmp_path / "nodes.csv"
        edges_path = tmp_path / "edges.csv"
        nodes_path.write_text("artist_id,popularity\n007,10\n7,20\n")
        edges_path.write_text("source,target,weight\n007,7,2\n")

        nodes_df, edges_df = load_tables(str(nodes_path), str(edges_path))

        assert nodes_df["artist_id"].tolist() == ["007", "7"]
        assert nodes_df["popularity"].tolist() == [10, 20]
        assert edges_df.iloc[0].tolist()[:2] == ["007", "7"]

    def test_missing_file(self, tmp_path):
        (tmp_path / "nodes.csv").write_text("id\na\n")
        with pytest.raises(FileNotFoundError):
            load_tables(str(tmp_path / "nodes.csv"), str(tmp_path / "edges.csv"))

    def test_edge_table_needs_two_columns(self, tmp_path):
        (tmp_path / "nodes.csv").write_text("id\na\n")
        (tmp_path / "edges.csv").write_text("source\na\n")
        with pytest.raises(MissingColumnsError):
            load_tables(str(tmp_path / "nodes.csv"), str(tmp_path / "edges.csv"))
