"""Tests for Lookup queries and the static scaling rules."""

from types import SimpleNamespace

import pytest

from errors import UnsupportedFeature
from lookup import (
    class_id,
    combat_rating_multiplier_type,
    is_combat_rating,
    quality_tier,
    scale_class,
    slot_type,
)
from simc_enums import (
    CombatRatingMultiplierType,
    InventoryType,
    ItemClass,
    ItemModType,
    ItemQuality,
    ItemSubclassWeapon,
    PlayerScaling,
)


def _item(item_level=200, quality=ItemQuality.EPIC, inventory_type=InventoryType.FINGER,
          item_class=ItemClass.ARMOR, item_subclass=0):
    return SimpleNamespace(item_level=item_level, quality=quality,
                           inventory_type=inventory_type, item_class=item_class,
                           item_subclass=item_subclass)


class TestStaticRules:

    def test_slot_type_armor(self):
        assert slot_type(ItemClass.ARMOR, 0, InventoryType.HEAD) == 0
        assert slot_type(ItemClass.ARMOR, 0, InventoryType.TRINKET) == 1
        assert slot_type(ItemClass.ARMOR, 0, InventoryType.FINGER) == 2
        assert slot_type(ItemClass.ARMOR, 0, InventoryType.SHIELD) == 3

    def test_slot_type_weapons(self):
        assert slot_type(ItemClass.WEAPON, ItemSubclassWeapon.STAFF, InventoryType.TWO_HAND_WEAPON) == 0
        assert slot_type(ItemClass.WEAPON, ItemSubclassWeapon.BOW, InventoryType.RANGED) == 0
        assert slot_type(ItemClass.WEAPON, ItemSubclassWeapon.DAGGER, InventoryType.WEAPON) == 3

    def test_slot_type_none(self):
        assert slot_type(ItemClass.ARMOR, 0, InventoryType.BODY) == -1
        assert slot_type(ItemClass.GEM, 0, InventoryType.NON_EQUIP) == -1

    def test_combat_rating_mods(self):
        assert is_combat_rating(ItemModType.VERSATILITY_RATING)
        assert is_combat_rating(ItemModType.HASTE_RATING)
        assert not is_combat_rating(ItemModType.STAMINA)
        assert not is_combat_rating(ItemModType.INTELLECT)

    def test_multiplier_type_by_slot(self):
        assert combat_rating_multiplier_type(InventoryType.FINGER) == CombatRatingMultiplierType.JEWELLERY
        assert combat_rating_multiplier_type(InventoryType.TRINKET) == CombatRatingMultiplierType.TRINKET
        assert combat_rating_multiplier_type(InventoryType.WEAPON_MAIN_HAND) == CombatRatingMultiplierType.WEAPON
        assert combat_rating_multiplier_type(InventoryType.CHEST) == CombatRatingMultiplierType.ARMOR
        assert combat_rating_multiplier_type(InventoryType.NON_EQUIP) == CombatRatingMultiplierType.INVALID

    def test_scale_class(self):
        assert scale_class(5) == PlayerScaling.PRIEST
        assert scale_class(12) == PlayerScaling.DEMON_HUNTER
        assert scale_class(-1) == PlayerScaling.SPECIAL_SCALE
        assert scale_class(-7) == PlayerScaling.SPECIAL_SCALE7
        assert scale_class(0) == PlayerScaling.NONE
        assert scale_class(99) == PlayerScaling.NONE

    def test_class_id_rows(self):
        assert class_id(PlayerScaling.PRIEST) == 5
        assert class_id(PlayerScaling.SPECIAL_SCALE) == 13
        assert class_id(PlayerScaling.SPECIAL_SCALE7) == 13
        assert class_id(PlayerScaling.SPECIAL_SCALE8) == 19
        assert class_id(PlayerScaling.NONE) == 0


class TestById:

    def test_item_new_then_legacy(self, lookup):
        assert lookup.raw_item(175733).name == "Brimming Ember Shard"
        assert lookup.raw_item(12345).name == "Legacy Blade"

    def test_item_missing(self, lookup):
        assert lookup.raw_item(999999) is None

    def test_spell(self, lookup):
        assert lookup.spell(274740).name == "Ancestral Call"
        assert lookup.spell(1) is None

    def test_gem_chain(self, lookup):
        gem = lookup.gem_property(lookup.raw_item(173128).gem_properties)
        enchant = lookup.enchantment(gem.enchant_id)
        assert enchant.id == 6500
        assert enchant.sub_enchantments[0].property == ItemModType.HASTE_RATING

    def test_missing_gem_and_enchant(self, lookup):
        assert lookup.gem_property(1) is None
        assert lookup.enchantment(1) is None

    def test_item_bonuses_keep_table_order(self, lookup):
        entries = lookup.item_bonuses(7009)
        assert [(e.type, e.value1) for e in entries] == [(1, 5), (3, 3)]
        assert lookup.item_bonuses(1) == []

    def test_curve_points_sorted(self, lookup):
        points = lookup.curve_points(1234)
        assert [p.index for p in points] == [0, 1]
        assert points[0].primary1 == pytest.approx(50.0)
        assert lookup.curve_points(9) == []


class TestByLevel:

    def test_random_props(self, lookup):
        assert lookup.random_props(226).epic[1] == pytest.approx(30.0)
        assert lookup.random_props(1) is None

    def test_combat_rating_multiplier(self, lookup):
        value = lookup.combat_rating_multiplier(226, CombatRatingMultiplierType.TRINKET)
        assert value == pytest.approx(1.237668)
        assert lookup.combat_rating_multiplier(226, CombatRatingMultiplierType.INVALID) == 0.0

    def test_multiplier_out_of_range(self, lookup):
        assert lookup.combat_rating_multiplier(0, CombatRatingMultiplierType.ARMOR) == 0.0
        assert lookup.combat_rating_multiplier(1301, CombatRatingMultiplierType.ARMOR) == 0.0

    def test_stamina_multiplier(self, lookup):
        assert lookup.stamina_multiplier(200, CombatRatingMultiplierType.JEWELLERY) == pytest.approx(1.5)

    def test_spell_scaling(self, lookup):
        assert lookup.spell_scaling(13, 60) == pytest.approx(95.0)
        assert lookup.spell_scaling(5, 60) == pytest.approx(91.0)

    def test_spell_scaling_out_of_range(self, lookup):
        assert lookup.spell_scaling(21, 60) == 0.0
        assert lookup.spell_scaling(13, 0) == 0.0
        assert lookup.spell_scaling(13, 81) == 0.0


class TestSpellQueries:

    def test_rppm_modifiers(self, lookup):
        entries = lookup.rppm_modifiers(339343)
        assert len(entries) == 2
        assert lookup.rppm_modifiers(589) == []

    def test_conduit_ranks_sorted(self, lookup):
        ranks = lookup.conduit_ranks(340609)
        assert [r.rank for r in ranks] == [0, 1, 2]
        assert [r.value for r in ranks] == pytest.approx([10.0, 11.0, 12.0])

    def test_spell_id_for_conduit(self, lookup):
        assert lookup.spell_id_for_conduit(270) == 340609
        assert lookup.spell_id_for_conduit(999) == 0


class TestTalents:

    def test_trait(self, lookup):
        assert lookup.trait(103677).name == "Rhapsody"
        assert lookup.trait(1) is None

    def test_traits_for_holy(self, lookup):
        ids = {t.trait_node_entry_id for t in lookup.traits_for(5, 257)}
        assert ids == {103325, 103677}

    def test_traits_for_shadow(self, lookup):
        ids = {t.trait_node_entry_id for t in lookup.traits_for(5, 258)}
        assert ids == {103325, 103800}

    def test_traits_for_unknown_class(self, lookup):
        assert lookup.traits_for(4, 259) == []

    def test_game_data_version(self, lookup):
        assert lookup.game_data_version() == "11.0.2.56313"


class TestBudgets:

    def test_item_budget_by_quality(self, lookup):
        assert lookup.item_budget(226, ItemQuality.EPIC) == pytest.approx(40.0)
        assert lookup.item_budget(226, ItemQuality.LEGENDARY) == pytest.approx(40.0)
        assert lookup.item_budget(226, ItemQuality.RARE) == pytest.approx(33.0)
        assert lookup.item_budget(226, ItemQuality.UNCOMMON) == pytest.approx(27.0)
        assert lookup.item_budget(226, ItemQuality.POOR) == pytest.approx(27.0)

    @pytest.mark.parametrize("quality,expected", [
        (ItemQuality.ARTIFACT, 40.0),
        (ItemQuality.MAX, 33.0),
    ])
    def test_item_budget_grouped_qualities(self, lookup, quality, expected):
        assert lookup.item_budget(226, quality) == pytest.approx(expected)

    def test_item_budget_clamped_by_max_level(self, lookup):
        assert lookup.item_budget(226, ItemQuality.EPIC, max_item_level=200) == pytest.approx(30.0)
        assert lookup.item_budget(200, ItemQuality.EPIC, max_item_level=226) == pytest.approx(30.0)

    def test_item_budget_unknown_level(self, lookup):
        assert lookup.item_budget(1, ItemQuality.EPIC) == 0.0

    def test_scaled_rating_on_trinket(self, lookup):
        item = _item(226, ItemQuality.EPIC, InventoryType.TRINKET)
        assert lookup.scaled_mod_value(item, ItemModType.VERSATILITY_RATING, 5259) == 19

    def test_scaled_stamina_on_ring(self, lookup):
        assert lookup.scaled_mod_value(_item(), ItemModType.STAMINA, 5000) == 12

    def test_primary_stat_has_no_multiplier(self, lookup):
        # 5000 * 16.5 * 0.0001 = 8.25 -> 8
        assert lookup.scaled_mod_value(_item(), ItemModType.INTELLECT, 5000) == 8

    def test_rare_uses_rare_column(self, lookup):
        item = _item(226, ItemQuality.RARE, InventoryType.TRINKET)
        # int(5259 * 25 * 0.0001 + 0.5) = 13 -> int(13 * 1.237668) = 16
        assert lookup.scaled_mod_value(item, ItemModType.VERSATILITY_RATING, 5259) == 16

    @pytest.mark.parametrize("quality,expected", [
        (ItemQuality.ARTIFACT, 19),
        (ItemQuality.MAX, 16),
    ])
    def test_scaled_rating_grouped_qualities(self, lookup, quality, expected):
        item = _item(226, quality, InventoryType.TRINKET)
        assert lookup.scaled_mod_value(item, ItemModType.VERSATILITY_RATING, 5259) == expected

    @pytest.mark.parametrize("quality", list(ItemQuality))
    def test_budget_paths_share_tier(self, lookup, quality):
        props = lookup.random_props(226)
        assert lookup.item_budget(226, quality) == quality_tier(props, quality)[0]

    def test_zero_allocation_unsupported(self, lookup):
        with pytest.raises(UnsupportedFeature):
            lookup.scaled_mod_value(_item(), ItemModType.STAMINA, 0)

    def test_no_budget_unsupported(self, lookup):
        with pytest.raises(UnsupportedFeature):
            lookup.scaled_mod_value(_item(item_level=1), ItemModType.STAMINA, 5000)
        with pytest.raises(UnsupportedFeature):
            lookup.scaled_mod_value(_item(inventory_type=InventoryType.BODY),
                                    ItemModType.STAMINA, 5000)
