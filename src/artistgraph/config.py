"""
config.py

Tunable knobs for the ArtistGraph pipeline.

Values come from (lowest to highest priority):
- the defaults below
- environment variables / a local .env file (ARTISTGRAPH_*)
- command line flags (see run.py)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


# ----------------------------
# Defaults
# ----------------------------

# Nodes with at least this many connections are shown in the visualization.
DEFAULT_MIN_DEGREE = 3

# Hard cap on rendered nodes (rendering cost grows fast past this).
DEFAULT_MAX_NODES = 1000

# Random sample size used only when no node reaches DEFAULT_MIN_DEGREE.
DEFAULT_SAMPLE_SIZE = 500

# How many artists to list in the "most connected" printout.
DEFAULT_TOP_K = 10

# Louvain resolution (1.0 = standard modularity).
DEFAULT_RESOLUTION = 1.0

ENV_PREFIX = "ARTISTGRAPH_"


@dataclass(frozen=True)
class PipelineConfig:
    min_degree: int = DEFAULT_MIN_DEGREE
    max_nodes: int = DEFAULT_MAX_NODES
    sample_size: int = DEFAULT_SAMPLE_SIZE
    top_k: int = DEFAULT_TOP_K
    seed: Optional[int] = None
    resolution: float = DEFAULT_RESOLUTION

    def __post_init__(self) -> None:
        for field_name in ("min_degree", "max_nodes", "sample_size", "top_k"):
            value = getattr(self, field_name)
            if value < 0:
                raise ValueError(f"{field_name} must be >= 0 (got {value})")
        if self.resolution <= 0:
            raise ValueError(f"resolution must be > 0 (got {self.resolution})")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "PipelineConfig":
        """
        Build a config from ARTISTGRAPH_* environment variables.
        A .env file (if present) is loaded first; real env vars win over it.
        """
        load_dotenv(dotenv_path=env_file, override=False)

        seed = _env_value("SEED", int)
        return cls(
            min_degree=_env_value("MIN_DEGREE", int, DEFAULT_MIN_DEGREE),
            max_nodes=_env_value("MAX_NODES", int, DEFAULT_MAX_NODES),
            sample_size=_env_value("SAMPLE_SIZE", int, DEFAULT_SAMPLE_SIZE),
            top_k=_env_value("TOP_K", int, DEFAULT_TOP_K),
            seed=seed,
            resolution=_env_value("RESOLUTION", float, DEFAULT_RESOLUTION),
        )


def _env_value(name: str, cast, default=None):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from None
