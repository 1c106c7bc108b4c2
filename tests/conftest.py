"""Shared fixtures for the SimcData test suite."""

import sys
import shutil
import logging
from pathlib import Path

import pytest

# Ensure src/ is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from data_provider import DataProvider
from lookup import Lookup
from spell_builder import SpellBuilder
from item_builder import ItemBuilder

logger = logging.getLogger(__name__)

# ── Fixtures directory ───────────────────────────────────

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def fill_cache_dir(target: Path) -> Path:
    """Copy every hand-written .raw dump into `target` (fresh mtimes)."""
    target.mkdir(parents=True, exist_ok=True)
    for raw in FIXTURES_DIR.glob("*.raw"):
        shutil.copy(raw, target / raw.name)
    return target


def load_fixture(filename):
    """Load a single fixture file by name."""
    path = FIXTURES_DIR / filename
    if not path.exists():
        pytest.skip(f"Fixture {filename} not found")
    return path.read_text(encoding="utf-8")


# ── Session-scoped heavy fixtures ────────────────────────

@pytest.fixture(scope="session")
def cache_dir(tmp_path_factory):
    """A cache directory pre-filled with the fixture dumps."""
    return fill_cache_dir(tmp_path_factory.mktemp("simc-cache"))


@pytest.fixture(scope="session")
def provider(cache_dir):
    """DataProvider reading only the local fixture dumps (TTL keeps it offline)."""
    return DataProvider(cache_dir=cache_dir, cache_ttl=10 * 365 * 86400)


@pytest.fixture(scope="session")
def lookup(provider):
    return Lookup(provider)


@pytest.fixture(scope="session")
def spell_builder(lookup):
    return SpellBuilder(lookup)


@pytest.fixture(scope="session")
def item_builder(lookup, spell_builder):
    return ItemBuilder(lookup, spell_builder)


@pytest.fixture(scope="session")
def engine(provider):
    """Initialized ScalingEngine over the fixture data."""
    from core import DataConfig, ScalingEngine

    cfg = DataConfig(game_id="wow", branch="thewarwithin", cache_dir=provider.cache_dir)
    eng = ScalingEngine(cfg, provider=provider)
    if not eng.initialize():
        pytest.skip("ScalingEngine could not initialize from fixture data")
    return eng


@pytest.fixture
def sample_profile():
    """Addon export text of the sample priest profile."""
    return load_fixture("sample.simc")
