"""Tests for the ScalingEngine facade."""

import sys
from pathlib import Path

import pytest

# Ensure src/ is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from conftest import fill_cache_dir
from simc_enums import InventoryType, ItemModType, ItemQuality
from simc_models import ItemOptions, SpellOptions


def _config(cache_dir):
    from core import DataConfig
    return DataConfig(game_id="wow", branch="thewarwithin", cache_dir=cache_dir)


class TestScalingEngineInit:
    """Test ScalingEngine construction and initialization."""

    def test_construct_with_wow_config(self):
        from core import ScalingEngine
        from games.wow import create_wow_config

        engine = ScalingEngine(create_wow_config())
        assert not engine.ready
        assert engine.config.game_id == "wow"

    def test_calls_before_init_raise(self, tmp_path):
        from core import ScalingEngine

        engine = ScalingEngine(_config(tmp_path))
        with pytest.raises(RuntimeError):
            engine.get_game_data_version()
        with pytest.raises(RuntimeError):
            engine.generate_item(ItemOptions(item_id=178000))

    def test_initialize_from_local_dumps(self, tmp_path):
        from core import ScalingEngine

        engine = ScalingEngine(_config(fill_cache_dir(tmp_path / "cache")))
        assert engine.initialize() is True
        assert engine.ready
        assert engine.get_game_data_version() == "11.0.2.56313"

    def test_initialize_never_raises(self, tmp_path):
        from core import ScalingEngine

        class _BrokenProvider:
            use_ptr = False
            branch = "thewarwithin"

            def get_table(self, file_type):
                raise OSError("disk on fire")

        engine = ScalingEngine(_config(tmp_path), provider=_BrokenProvider())
        assert engine.initialize() is False
        assert not engine.ready


class TestGenerateProfile:

    def test_items_and_talents(self, engine, sample_profile):
        profile = engine.generate_profile(sample_profile)
        assert profile.parsed_profile.name == "Tester"
        assert profile.parsed_profile.spec_id == 257
        assert profile.parsed_profile.race_id == 29

        ids = [i.item_id for i in profile.generated_items]
        assert ids == [175733, 178000, 175733]
        assert [t.trait_entry_id for t in profile.talents] == [103325, 103677]
        assert profile.talents[1].rank == 2
        assert profile.talents[1].spell_id == 390622

    def test_generated_item_values(self, engine, sample_profile):
        trinket, ring, bag = engine.generate_profile(sample_profile).generated_items

        assert trinket.item_level == 226
        assert trinket.quality == ItemQuality.EPIC
        assert trinket.mod(ItemModType.VERSATILITY_RATING).stat_rating == 19
        assert trinket.effects[0].spell.scale_budget == pytest.approx(40.0)

        assert ring.mod(ItemModType.STAMINA).stat_rating == 12
        assert ring.mod(ItemModType.MASTERY_RATING).stat_rating == 5
        assert ring.gems[0].stat_rating == 95

        assert not bag.equipped
        assert bag.quality == ItemQuality.RARE
        assert bag.mod(ItemModType.VERSATILITY_RATING).stat_rating == 16

    def test_lines_input(self, engine, sample_profile):
        profile = engine.generate_profile(sample_profile.splitlines())
        assert len(profile.generated_items) == 3

    def test_empty_profile(self, engine):
        with pytest.raises(ValueError):
            engine.generate_profile("")
        with pytest.raises(ValueError):
            engine.generate_profile([])


class TestGenerateItem:

    def test_item(self, engine):
        item = engine.generate_item(ItemOptions(item_id=175733, bonus_ids=[7001, 7002, 7003]))
        assert item.item_level == 226

    def test_invalid_item_id(self, engine):
        with pytest.raises(ValueError):
            engine.generate_item(ItemOptions(item_id=0))

    def test_unknown_item_id(self, engine):
        with pytest.raises(ValueError):
            engine.generate_item(ItemOptions(item_id=424242))

    def test_unsupported_item_propagates(self, engine):
        from errors import UnsupportedFeature
        with pytest.raises(UnsupportedFeature):
            engine.generate_item(ItemOptions(item_id=178500))


class TestGenerateSpell:

    def test_player_spell(self, engine):
        spell = engine.generate_spell(SpellOptions(spell_id=274740, player_level=60))
        assert spell.scale_budget == pytest.approx(95.0)

    def test_item_spell(self, engine):
        spell = engine.generate_spell(SpellOptions(
            spell_id=350001, item_level=226, item_quality=ItemQuality.EPIC,
            item_inventory_type=InventoryType.TRINKET))
        assert spell.scale_budget == pytest.approx(40.0 * 1.237668)

    def test_unknown_spell(self, engine):
        assert engine.generate_spell(SpellOptions(spell_id=1, player_level=60)) is None


class TestTalentsAndConduits:

    def test_available_talents(self, engine):
        talents = engine.get_available_talents(5, 258)
        assert {t.trait_entry_id for t in talents} == {103325, 103800}
        assert all(t.rank == 0 for t in talents)

    def test_no_talents(self, engine):
        assert engine.get_available_talents(4, 259) == []

    def test_get_talent(self, engine):
        talent = engine.get_talent(103325, 1)
        assert talent.name == "Light's Inspiration"
        assert talent.spell_id == 373450
        assert engine.get_talent(1, 1) is None

    def test_spell_id_for_conduit(self, engine):
        assert engine.spell_id_for_conduit(270) == 340609
        assert engine.spell_id_for_conduit(999) == 0


class TestDataSourceSettings:

    def test_settings_before_init(self, tmp_path):
        from core import ScalingEngine

        engine = ScalingEngine(_config(tmp_path))
        engine.use_ptr_data = True
        engine.branch_name = "midnight"
        assert engine.config.use_ptr is True
        assert engine.use_ptr_data is True
        assert engine.branch_name == "midnight"

    def test_settings_reach_provider(self, tmp_path):
        from core import ScalingEngine

        cache = fill_cache_dir(tmp_path / "cache")
        engine = ScalingEngine(_config(cache))
        assert engine.initialize()

        engine.branch_name = "midnight"
        assert engine.config.branch == "midnight"
        assert engine._provider.branch == "midnight"
        assert not (cache / "VersionData.raw").exists()

    def test_clear_cache(self, tmp_path):
        from core import ScalingEngine

        cache = fill_cache_dir(tmp_path / "cache")
        engine = ScalingEngine(_config(cache))
        engine.clear_cache()  # no provider yet
        assert engine.initialize()
        engine.clear_cache()
        assert not (cache / "SpellData.raw").exists()
