"""
World of Warcraft data configuration factory.

Creates a DataConfig populated from config.py (and so from the
environment / .env file), with optional per-call overrides.
"""

from pathlib import Path
from typing import Optional

from core.data_config import DataConfig


def create_wow_config(
    branch: Optional[str] = None,
    use_ptr: Optional[bool] = None,
    cache_dir: Optional[Path] = None,
) -> DataConfig:
    """Create a DataConfig for the retail game data.

    Args:
        branch: Override simc branch. Defaults to config.DEFAULT_BRANCH.
        use_ptr: Override PTR data. Defaults to config.USE_PTR_DATA.
        cache_dir: Override cache directory. Defaults to config.CACHE_DIR.

    Returns:
        Fully populated DataConfig.
    """
    from config import (
        DEFAULT_BRANCH,
        USE_PTR_DATA,
        CACHE_DIR,
        CACHE_TTL,
        SIMC_RAW_BASE_URL,
        HTTP_TIMEOUT,
        GEM_SCALING_REFERENCE_LEVEL,
        MAX_TRIGGER_DEPTH,
    )

    return DataConfig(
        game_id="wow",
        branch=branch or DEFAULT_BRANCH,
        cache_dir=Path(cache_dir) if cache_dir else CACHE_DIR,
        use_ptr=USE_PTR_DATA if use_ptr is None else use_ptr,
        raw_base_url=SIMC_RAW_BASE_URL,
        http_timeout=HTTP_TIMEOUT,
        cache_ttl=CACHE_TTL,
        gem_scaling_level=GEM_SCALING_REFERENCE_LEVEL,
        max_trigger_depth=MAX_TRIGGER_DEPTH,
    )
