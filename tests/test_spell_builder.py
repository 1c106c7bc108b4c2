"""Tests for SpellBuilder in player and item context."""

import logging

import pytest

from raw_data import RawSpell
from simc_enums import InventoryType, ItemQuality
from spell_builder import SX_SCALE_ILEVEL, SpellBuilder, _SpellContext, has_attribute

TRINKET_CR_226 = 1.237668


class TestPlayerSpells:

    def test_special_scale_budget(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 274740)
        assert spell.name == "Ancestral Call"
        assert spell.scale_budget == pytest.approx(95.0)
        assert spell.effects[0].coefficient == pytest.approx(1.32)
        assert spell.effects[0].scale_budget == pytest.approx(95.0)

    def test_class_row_budget(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 589)
        assert spell.scale_budget == pytest.approx(91.0)

    def test_max_scaling_level_clamps(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 350003)
        assert spell.scale_budget == pytest.approx(85.0)

    def test_unscaled_spell(self, spell_builder):
        assert spell_builder.build_player_spell(60, 339343).scale_budget == 0.0

    def test_power_costs(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 589)
        assert spell.power_cost == pytest.approx(0.75)
        assert spell.power_costs == {1001: pytest.approx(0.75), 1002: pytest.approx(1.5)}

    def test_no_power_rows(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 274740)
        assert spell.power_cost == 0.0
        assert spell.power_costs == {}

    def test_conduit_ranks(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 340609)
        assert spell.conduit_id == 270
        assert spell.conduit_ranks == {0: pytest.approx(10.0), 1: pytest.approx(11.0),
                                       2: pytest.approx(12.0)}

    def test_unknown_spell(self, spell_builder):
        assert spell_builder.build_player_spell(60, 1) is None


class TestItemSpells:

    def test_special_scale_uses_item_budget(self, spell_builder):
        spell = spell_builder.build_item_spell(343538, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        assert spell.scale_budget == pytest.approx(40.0)
        assert spell.combat_rating_multiplier == pytest.approx(TRINKET_CR_226)

    def test_quality_picks_budget_column(self, spell_builder):
        spell = spell_builder.build_item_spell(343538, 226, ItemQuality.RARE,
                                               InventoryType.TRINKET)
        assert spell.scale_budget == pytest.approx(33.0)

    @pytest.mark.parametrize("quality,expected", [
        (ItemQuality.ARTIFACT, 40.0),
        (ItemQuality.MAX, 33.0),
    ])
    def test_grouped_qualities_match_stat_tiers(self, spell_builder, quality, expected):
        spell = spell_builder.build_item_spell(343538, 226, quality, InventoryType.TRINKET)
        assert spell.scale_budget == pytest.approx(expected)

    def test_rating_scaled_spell(self, spell_builder):
        spell = spell_builder.build_item_spell(350001, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        assert spell.scale_budget == pytest.approx(40.0 * TRINKET_CR_226)

    def test_damage_replace_stat_spell(self, spell_builder):
        spell = spell_builder.build_item_spell(350002, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        assert spell.scale_budget == pytest.approx(1234.0)

    def test_no_multiplier_for_non_equipment(self, spell_builder):
        spell = spell_builder.build_item_spell(343538, 226, ItemQuality.EPIC,
                                               InventoryType.NON_EQUIP)
        assert spell.combat_rating_multiplier == 0.0
        assert spell.scale_budget == pytest.approx(40.0)

    def test_conduits_only_in_player_context(self, spell_builder):
        spell = spell_builder.build_item_spell(340609, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        assert spell.conduit_id == 0
        assert spell.conduit_ranks == {}

    def test_effects_sorted_by_index(self, spell_builder):
        spell = spell_builder.build_item_spell(343538, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        assert [e.effect_index for e in spell.effects] == [0, 1]
        assert spell.effects[0].coefficient == pytest.approx(300.020416)
        assert spell.effects[1].coefficient == pytest.approx(371.653076)


class TestItemLevelAttribute:

    def _unscaled(self, attributes):
        return RawSpell(id=990001, name="Scaled By Flag", scaling_type=0, attributes=attributes)

    def _context(self):
        return _SpellContext(item_mode=True, item_level=226, quality=ItemQuality.EPIC,
                             inventory_type=InventoryType.TRINKET)

    def test_has_attribute(self):
        attributes = [0] * 15
        attributes[11] = 1 << 2
        assert has_attribute(self._unscaled(attributes), SX_SCALE_ILEVEL)
        assert not has_attribute(self._unscaled([0] * 15), SX_SCALE_ILEVEL)
        assert not has_attribute(self._unscaled([]), SX_SCALE_ILEVEL)

    def test_flagged_spell_logs_and_keeps_budget(self, spell_builder, caplog):
        attributes = [0] * 15
        attributes[11] = 1 << 2
        with caplog.at_level(logging.DEBUG, logger="spell_builder"):
            budget, _ = spell_builder._item_budget(self._unscaled(attributes), self._context())
        assert budget == pytest.approx(40.0)
        assert "990001 scales with item level by attribute" in caplog.text

    def test_unflagged_spell_not_logged(self, spell_builder, caplog):
        with caplog.at_level(logging.DEBUG, logger="spell_builder"):
            budget, _ = spell_builder._item_budget(self._unscaled([0] * 15), self._context())
        assert budget == pytest.approx(40.0)
        assert "by attribute" not in caplog.text


class TestRppm:

    def test_modifiers(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 339343)
        assert spell.rppm == pytest.approx(2.0)
        hasted, spec = spell.rppm_modifiers
        assert hasted.is_hasted and not hasted.is_spec_modified
        assert hasted.spec == 0
        assert spec.is_spec_modified and not spec.is_hasted
        assert spec.spec == 257
        assert spec.coefficient == pytest.approx(-0.5)


class TestTriggers:

    def test_trigger_built_in_same_context(self, spell_builder):
        spell = spell_builder.build_item_spell(344117, 226, ItemQuality.EPIC,
                                               InventoryType.TRINKET)
        child = spell.effects[0].trigger_spell
        assert child.spell_id == 344118
        assert child.scale_budget == pytest.approx(40.0)
        assert child.effects[0].coefficient == pytest.approx(2.5)
        assert not child.cycle_detected

    def test_self_trigger_marked(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 900001)
        marker = spell.effects[0].trigger_spell
        assert marker.cycle_detected
        assert marker.spell_id == 900001
        assert marker.effects == []

    def test_mutual_trigger_marked(self, spell_builder):
        spell = spell_builder.build_player_spell(60, 900002)
        loop_b = spell.effects[0].trigger_spell
        assert loop_b.spell_id == 900003
        assert not loop_b.cycle_detected
        marker = loop_b.effects[0].trigger_spell
        assert marker.spell_id == 900002
        assert marker.cycle_detected
        assert marker.name == "Loop A"

    def test_depth_limit(self, lookup):
        shallow = SpellBuilder(lookup, max_depth=0)
        spell = shallow.build_item_spell(344117, 226, ItemQuality.EPIC, InventoryType.TRINKET)
        marker = spell.effects[0].trigger_spell
        assert marker.spell_id == 344118
        assert marker.cycle_detected


class TestSerialization:

    def test_to_dict_nests_triggers(self, spell_builder):
        data = spell_builder.build_item_spell(344117, 226, ItemQuality.EPIC,
                                              InventoryType.TRINKET).to_dict()
        assert data["spell_id"] == 344117
        assert data["effects"][0]["trigger_spell"]["spell_id"] == 344118


def test_repeat_builds_match(spell_builder):
    first = spell_builder.build_player_spell(60, 339343)
    assert spell_builder.build_player_spell(60, 339343) == first
