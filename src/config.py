"""
SimcData - Configuration
All tunable constants in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean-ish environment variable ("1", "true", "yes", "on")."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ─────────────────────────────────────────────
# Upstream data source
# ─────────────────────────────────────────────
# simc repository branch the generated dumps are pulled from
DEFAULT_BRANCH = os.environ.get("SIMC_BRANCH", "thewarwithin")

# Use the PTR dumps (file names get a "_ptr" suffix)
USE_PTR_DATA = _env_flag("SIMC_USE_PTR")

SIMC_RAW_BASE_URL = "https://raw.githubusercontent.com/simulationcraft/simc"
SIMC_GENERATED_PATH = "engine/dbc/generated"

HTTP_TIMEOUT = int(os.environ.get("SIMC_HTTP_TIMEOUT", "15"))  # seconds
HTTP_USER_AGENT = "SimcData/1.0"

# ─────────────────────────────────────────────
# Local cache
# ─────────────────────────────────────────────
CACHE_DIR = Path(os.environ.get(
    "SIMC_CACHE_DIR",
    str(Path(os.path.expanduser("~")) / ".simc-data" / "cache"),
))

# How long a downloaded raw dump is trusted before revalidating (seconds)
CACHE_TTL = int(os.environ.get("SIMC_CACHE_TTL", "86400"))  # 24 hours

# ETag bookkeeping for conditional downloads
ETAG_CACHE_FILE = "FileDownloadCache.json"

# ─────────────────────────────────────────────
# Table shapes
# ─────────────────────────────────────────────
MAX_ITEM_LEVEL = 1300          # columns in the rating/stamina multiplier tables
MULTIPLIER_TABLE_ROWS = 4      # armor, weapon, trinket, jewellery
SPELL_SCALING_ROWS = 21        # class rows incl. the special scaling rows
SPELL_SCALING_LEVELS = 80      # player levels per row

# Item id boundaries for the new/legacy split of the item table
ITEM_DATA_NEW_MIN_ID = 157759
ITEM_DATA_OLD_MAX_ID = 157760

# ─────────────────────────────────────────────
# Scaling
# ─────────────────────────────────────────────
# Player level gem enchantments are scaled at
GEM_SCALING_REFERENCE_LEVEL = 60

# Nested trigger spells deeper than this are cut off
MAX_TRIGGER_DEPTH = 16

# ─────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────
LOG_LEVEL = os.environ.get("SIMC_LOG_LEVEL", "INFO")
