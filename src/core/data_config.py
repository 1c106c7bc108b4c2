"""
DataConfig: data source and scaling configuration dataclass.

Every value the data provider and builders need is a field here.
Consumers create a DataConfig (via a factory like create_wow_config) and
pass it to ScalingEngine, which wires the provider, lookup and builders.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataConfig:
    """Complete configuration for a ScalingEngine."""

    # ── Identity ────────────────────────────────────────────
    game_id: str                          # e.g. "wow"
    branch: str                           # simc branch, e.g. "thewarwithin"
    cache_dir: Path                       # raw dumps + parsed JSON tables
    use_ptr: bool = False

    # ── Upstream ────────────────────────────────────────────
    raw_base_url: str = "https://raw.githubusercontent.com/simulationcraft/simc"
    http_timeout: int = 15                # seconds
    cache_ttl: int = 86400                # seconds a raw dump is trusted

    # ── Scaling ─────────────────────────────────────────────
    gem_scaling_level: int = 60           # player level gem enchants scale at
    max_trigger_depth: int = 16           # nested trigger spells beyond this are cut
