"""
SimcData Core: item, spell and profile scaling engine.

Usage:
    from core import ScalingEngine, DataConfig
    from games.wow import create_wow_config

    engine = ScalingEngine(create_wow_config())
    engine.initialize()
    profile = engine.generate_profile(addon_export_text)
"""

from core.data_config import DataConfig
from core.scaling_engine import ScalingEngine

# Request and result types live in flat modules:
#   from simc_models import ItemOptions, SpellOptions, SimcItem, SimcSpell
#   from profile_parser import ParsedProfile, ParsedItem

__all__ = [
    "ScalingEngine",
    "DataConfig",
]
