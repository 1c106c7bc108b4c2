"""
SimcData - Lookup
Queries over the decoded tables plus the static classification rules the
scaling formulas depend on (slot types, rating categories, scaling classes).

Misses are not exceptions: by-id queries return None (or an empty list)
and log a warning.
"""

import logging
from typing import Callable, Dict, List, Optional

from config import MAX_ITEM_LEVEL, SPELL_SCALING_LEVELS, SPELL_SCALING_ROWS
from errors import UnsupportedFeature
from raw_data import (
    RawCurvePoint,
    RawGemProperty,
    RawItem,
    RawItemBonus,
    RawItemEnchantment,
    RawRandomPropData,
    RawRppmEntry,
    RawSpell,
    RawSpellConduitRankEntry,
    RawTrait,
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
from table_decoder import SimcFileType

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────
# Static classification
# ─────────────────────────────────────────────

_TWO_HAND_OR_RANGED = frozenset({
    ItemSubclassWeapon.AXE2,
    ItemSubclassWeapon.MACE2,
    ItemSubclassWeapon.POLEARM,
    ItemSubclassWeapon.SWORD2,
    ItemSubclassWeapon.STAFF,
    ItemSubclassWeapon.GUN,
    ItemSubclassWeapon.BOW,
    ItemSubclassWeapon.CROSSBOW,
    ItemSubclassWeapon.THROWN,
})

# Armor inventory type -> random property column
_ARMOR_SLOT_TYPES = {
    InventoryType.HEAD: 0,
    InventoryType.CHEST: 0,
    InventoryType.LEGS: 0,
    InventoryType.ROBE: 0,
    InventoryType.SHOULDERS: 1,
    InventoryType.WAIST: 1,
    InventoryType.FEET: 1,
    InventoryType.HANDS: 1,
    InventoryType.TRINKET: 1,
    InventoryType.NECK: 2,
    InventoryType.FINGER: 2,
    InventoryType.CLOAK: 2,
    InventoryType.WRISTS: 2,
    InventoryType.WEAPON_OFF_HAND: 3,
    InventoryType.HOLDABLE: 3,
    InventoryType.SHIELD: 3,
}

COMBAT_RATING_MODS = frozenset({
    ItemModType.MASTERY_RATING,
    ItemModType.DODGE_RATING,
    ItemModType.PARRY_RATING,
    ItemModType.BLOCK_RATING,
    ItemModType.HIT_MELEE_RATING,
    ItemModType.HIT_RANGED_RATING,
    ItemModType.HIT_SPELL_RATING,
    ItemModType.CRIT_MELEE_RATING,
    ItemModType.CRIT_RANGED_RATING,
    ItemModType.CRIT_SPELL_RATING,
    ItemModType.CRIT_TAKEN_RANGED_RATING,
    ItemModType.CRIT_TAKEN_SPELL_RATING,
    ItemModType.HASTE_MELEE_RATING,
    ItemModType.HASTE_RANGED_RATING,
    ItemModType.HASTE_SPELL_RATING,
    ItemModType.HIT_RATING,
    ItemModType.CRIT_RATING,
    ItemModType.HIT_TAKEN_RATING,
    ItemModType.CRIT_TAKEN_RATING,
    ItemModType.RESILIENCE_RATING,
    ItemModType.HASTE_RATING,
    ItemModType.EXPERTISE_RATING,
    ItemModType.MULTISTRIKE_RATING,
    ItemModType.SPEED_RATING,
    ItemModType.LEECH_RATING,
    ItemModType.AVOIDANCE_RATING,
    ItemModType.VERSATILITY_RATING,
    ItemModType.EXTRA_ARMOR,
})

_CR_TYPE_BY_INVENTORY = {
    InventoryType.NECK: CombatRatingMultiplierType.JEWELLERY,
    InventoryType.FINGER: CombatRatingMultiplierType.JEWELLERY,
    InventoryType.TRINKET: CombatRatingMultiplierType.TRINKET,
    InventoryType.WEAPON: CombatRatingMultiplierType.WEAPON,
    InventoryType.TWO_HAND_WEAPON: CombatRatingMultiplierType.WEAPON,
    InventoryType.WEAPON_MAIN_HAND: CombatRatingMultiplierType.WEAPON,
    InventoryType.WEAPON_OFF_HAND: CombatRatingMultiplierType.WEAPON,
    InventoryType.RANGED: CombatRatingMultiplierType.WEAPON,
    InventoryType.RANGED_RIGHT: CombatRatingMultiplierType.WEAPON,
    InventoryType.THROWN: CombatRatingMultiplierType.WEAPON,
    InventoryType.ROBE: CombatRatingMultiplierType.ARMOR,
    InventoryType.HEAD: CombatRatingMultiplierType.ARMOR,
    InventoryType.SHOULDERS: CombatRatingMultiplierType.ARMOR,
    InventoryType.CHEST: CombatRatingMultiplierType.ARMOR,
    InventoryType.CLOAK: CombatRatingMultiplierType.ARMOR,
    InventoryType.BODY: CombatRatingMultiplierType.ARMOR,
    InventoryType.WRISTS: CombatRatingMultiplierType.ARMOR,
    InventoryType.WAIST: CombatRatingMultiplierType.ARMOR,
    InventoryType.LEGS: CombatRatingMultiplierType.ARMOR,
    InventoryType.FEET: CombatRatingMultiplierType.ARMOR,
    InventoryType.SHIELD: CombatRatingMultiplierType.ARMOR,
    InventoryType.HOLDABLE: CombatRatingMultiplierType.ARMOR,
    InventoryType.HANDS: CombatRatingMultiplierType.ARMOR,
}

# Spell data scale number -> scaling class
_SCALE_CLASSES = {
    -8: PlayerScaling.SPECIAL_SCALE8,
    -7: PlayerScaling.SPECIAL_SCALE7,
    -6: PlayerScaling.SPECIAL_SCALE6,
    -5: PlayerScaling.SPECIAL_SCALE5,
    -4: PlayerScaling.SPECIAL_SCALE4,
    -3: PlayerScaling.SPECIAL_SCALE3,
    -2: PlayerScaling.SPECIAL_SCALE2,
    -1: PlayerScaling.SPECIAL_SCALE,
    1: PlayerScaling.WARRIOR,
    2: PlayerScaling.PALADIN,
    3: PlayerScaling.HUNTER,
    4: PlayerScaling.ROGUE,
    5: PlayerScaling.PRIEST,
    6: PlayerScaling.DEATH_KNIGHT,
    7: PlayerScaling.SHAMAN,
    8: PlayerScaling.MAGE,
    9: PlayerScaling.WARLOCK,
    10: PlayerScaling.MONK,
    11: PlayerScaling.DRUID,
    12: PlayerScaling.DEMON_HUNTER,
}

# Scaling class -> spell scaling table row. SPECIAL_SCALE7 shares row 13
# with SPECIAL_SCALE; its item-context budget comes from the rating
# multiplier instead.
_CLASS_IDS = {
    PlayerScaling.WARRIOR: 1,
    PlayerScaling.PALADIN: 2,
    PlayerScaling.HUNTER: 3,
    PlayerScaling.ROGUE: 4,
    PlayerScaling.PRIEST: 5,
    PlayerScaling.DEATH_KNIGHT: 6,
    PlayerScaling.SHAMAN: 7,
    PlayerScaling.MAGE: 8,
    PlayerScaling.WARLOCK: 9,
    PlayerScaling.MONK: 10,
    PlayerScaling.DRUID: 11,
    PlayerScaling.DEMON_HUNTER: 12,
    PlayerScaling.SPECIAL_SCALE: 13,
    PlayerScaling.SPECIAL_SCALE2: 14,
    PlayerScaling.SPECIAL_SCALE3: 15,
    PlayerScaling.SPECIAL_SCALE4: 16,
    PlayerScaling.SPECIAL_SCALE5: 17,
    PlayerScaling.SPECIAL_SCALE6: 18,
    PlayerScaling.SPECIAL_SCALE7: 13,
    PlayerScaling.SPECIAL_SCALE8: 19,
}


def slot_type(item_class: int, item_subclass: int, inventory_type: int) -> int:
    """Random property column for an item, -1 when it has none."""
    if item_class == ItemClass.WEAPON:
        return 0 if item_subclass in _TWO_HAND_OR_RANGED else 3
    if item_class == ItemClass.ARMOR:
        return _ARMOR_SLOT_TYPES.get(inventory_type, -1)
    return -1


def is_combat_rating(mod_type: int) -> bool:
    return mod_type in COMBAT_RATING_MODS


def combat_rating_multiplier_type(inventory_type: int) -> CombatRatingMultiplierType:
    return _CR_TYPE_BY_INVENTORY.get(inventory_type, CombatRatingMultiplierType.INVALID)


def scale_class(scale_type: int) -> PlayerScaling:
    """Scaling class for a spell's raw scale number (-8..-1, 1..12)."""
    return _SCALE_CLASSES.get(scale_type, PlayerScaling.NONE)


def class_id(scaling: PlayerScaling) -> int:
    """Spell scaling table row for a scaling class, 0 when unscaled."""
    return _CLASS_IDS.get(scaling, 0)


def quality_tier(props: RawRandomPropData, quality: int) -> List[float]:
    """Random property budgets (epic, rare or uncommon) used for a quality."""
    if quality in (ItemQuality.EPIC, ItemQuality.LEGENDARY, ItemQuality.ARTIFACT):
        return props.epic
    if quality in (ItemQuality.RARE, ItemQuality.MAX):
        return props.rare
    return props.uncommon


class Lookup:
    """By-id, by-item-level and by-class queries over a DataProvider."""

    def __init__(self, provider):
        self.provider = provider
        self._indexes: Dict[object, tuple] = {}

    # Static rules, exposed here for callers holding a Lookup
    slot_type = staticmethod(slot_type)
    is_combat_rating = staticmethod(is_combat_rating)
    combat_rating_multiplier_type = staticmethod(combat_rating_multiplier_type)
    scale_class = staticmethod(scale_class)
    class_id = staticmethod(class_id)

    # ── Index plumbing ──────────────────────────────────────

    def _index(self, file_type: SimcFileType, key: Callable, name: str = "",
               many: bool = False) -> dict:
        """Dict over a table, rebuilt whenever the provider hands out a new table."""
        table = self.provider.get_table(file_type)
        cache_key = (file_type, name)
        cached = self._indexes.get(cache_key)
        if cached is not None and cached[0] is table:
            return cached[1]

        index: dict = {}
        for record in table:
            k = key(record)
            if many:
                index.setdefault(k, []).append(record)
            else:
                index.setdefault(k, record)
        self._indexes[cache_key] = (table, index)
        return index

    # ── By id ───────────────────────────────────────────────

    def raw_item(self, item_id: int) -> Optional[RawItem]:
        """Item from the new table, falling back to the legacy table."""
        item = self._index(SimcFileType.ITEM_DATA_NEW, lambda i: i.id).get(item_id)
        if item is None:
            item = self._index(SimcFileType.ITEM_DATA_OLD, lambda i: i.id).get(item_id)
        if item is None:
            logger.warning(f"Lookup: item {item_id} not found")
        return item

    def spell(self, spell_id: int) -> Optional[RawSpell]:
        spell = self._index(SimcFileType.SPELL_DATA, lambda s: s.id).get(spell_id)
        if spell is None:
            logger.warning(f"Lookup: spell {spell_id} not found")
        return spell

    def gem_property(self, gem_property_id: int) -> Optional[RawGemProperty]:
        gem = self._index(SimcFileType.GEM_DATA, lambda g: g.id).get(gem_property_id)
        if gem is None:
            logger.warning(f"Lookup: gem property {gem_property_id} not found")
        return gem

    def enchantment(self, enchant_id: int) -> Optional[RawItemEnchantment]:
        enchant = self._index(SimcFileType.ITEM_ENCHANT_DATA, lambda e: e.id).get(enchant_id)
        if enchant is None:
            logger.warning(f"Lookup: enchantment {enchant_id} not found")
        return enchant

    def item_bonuses(self, bonus_id: int) -> List[RawItemBonus]:
        """All entries of one bonus id, in table order."""
        entries = self._index(SimcFileType.ITEM_BONUS_DATA, lambda b: b.bonus_id,
                              many=True).get(bonus_id, [])
        if not entries:
            logger.warning(f"Lookup: item bonus {bonus_id} not found")
        return entries

    def curve_points(self, curve_id: int) -> List[RawCurvePoint]:
        points = self._index(SimcFileType.CURVE_POINTS, lambda c: c.curve_id,
                             many=True).get(curve_id, [])
        return sorted(points, key=lambda p: p.index)

    # ── By item level ───────────────────────────────────────

    def random_props(self, item_level: int) -> Optional[RawRandomPropData]:
        props = self._index(SimcFileType.RANDOM_PROP_POINTS,
                            lambda p: p.item_level).get(item_level)
        if props is None:
            logger.warning(f"Lookup: no random properties for item level {item_level}")
        return props

    def combat_rating_multiplier(self, item_level: int,
                                 cr_type: CombatRatingMultiplierType) -> float:
        return self._multiplier(SimcFileType.COMBAT_RATING_MULTIPLIERS, item_level, cr_type)

    def stamina_multiplier(self, item_level: int,
                           cr_type: CombatRatingMultiplierType) -> float:
        return self._multiplier(SimcFileType.STAMINA_MULTIPLIERS, item_level, cr_type)

    def _multiplier(self, file_type: SimcFileType, item_level: int,
                    cr_type: CombatRatingMultiplierType) -> float:
        if cr_type == CombatRatingMultiplierType.INVALID:
            return 0.0
        if not 1 <= item_level <= MAX_ITEM_LEVEL:
            logger.warning(f"Lookup: item level {item_level} outside multiplier table")
            return 0.0
        table = self.provider.get_table(file_type)
        return float(table[int(cr_type)][item_level - 1])

    # ── By scaling class ────────────────────────────────────

    def spell_scaling(self, scale_index: int, player_level: int) -> float:
        """Spell scaling value for a table row (see class_id) at a level."""
        in_range = (0 <= scale_index < SPELL_SCALING_ROWS
                    and 1 <= player_level <= SPELL_SCALING_LEVELS)
        if not in_range:
            logger.warning(f"Lookup: spell scaling [{scale_index}][{player_level}] out of range")
            return 0.0
        table = self.provider.get_table(SimcFileType.SPELL_SCALE_MULTIPLIERS)
        return float(table[scale_index][player_level - 1])

    # ── By spell id ─────────────────────────────────────────

    def rppm_modifiers(self, spell_id: int) -> List[RawRppmEntry]:
        return self._index(SimcFileType.RPPM_DATA, lambda r: r.spell_id,
                           many=True).get(spell_id, [])

    def conduit_ranks(self, spell_id: int) -> List[RawSpellConduitRankEntry]:
        ranks = self._index(SimcFileType.CONDUIT_RANK_DATA, lambda c: c.spell_id,
                            many=True).get(spell_id, [])
        return sorted(ranks, key=lambda c: c.rank)

    def spell_id_for_conduit(self, conduit_id: int) -> int:
        """Spell behind a conduit, 0 when the conduit is unknown."""
        ranks = self._index(SimcFileType.CONDUIT_RANK_DATA, lambda c: c.conduit_id,
                            name="by_conduit", many=True).get(conduit_id, [])
        if not ranks:
            logger.warning(f"Lookup: conduit {conduit_id} not found")
            return 0
        return ranks[0].spell_id

    # ── Talents ─────────────────────────────────────────────

    def trait(self, trait_node_entry_id: int) -> Optional[RawTrait]:
        trait = self._index(SimcFileType.TRAIT_DATA,
                            lambda t: t.trait_node_entry_id).get(trait_node_entry_id)
        if trait is None:
            logger.warning(f"Lookup: trait entry {trait_node_entry_id} not found")
        return trait

    def traits_for(self, class_id: int, spec_id: int) -> List[RawTrait]:
        """Traits of a class usable by a spec (no spec list means every spec)."""
        traits = self._index(SimcFileType.TRAIT_DATA, lambda t: t.class_id,
                             name="by_class", many=True).get(class_id, [])
        result = []
        for trait in traits:
            specs = [s for s in trait.spec_ids if s]
            if not specs or spec_id in specs:
                result.append(trait)
        return result

    def game_data_version(self) -> str:
        return self.provider.get_table(SimcFileType.GAME_DATA_VERSION) or ""

    # ── Budgets ─────────────────────────────────────────────

    def item_budget(self, item_level: int, quality: int, max_item_level: int = 0) -> float:
        """Column-0 random property budget for an item level and quality."""
        scale_level = item_level
        if max_item_level > 0:
            scale_level = min(scale_level, max_item_level)

        props = self.random_props(scale_level)
        if props is None:
            return 0.0

        return quality_tier(props, quality)[0]

    def scaled_mod_value(self, item, mod_type: int, stat_allocation: int) -> int:
        """Final stat value of one item mod.

        `item` needs item_class, item_subclass, inventory_type, quality and
        item_level (a SimcItem being built).

        Raises:
            UnsupportedFeature: the mod has no allocation or the item no budget.
        """
        slot = slot_type(item.item_class, item.item_subclass, item.inventory_type)
        budget = 0.0

        if slot != -1 and item.quality > 0:
            props = self.random_props(item.item_level)
            if props is not None:
                budget = quality_tier(props, item.quality)[slot]

        if stat_allocation <= 0 or budget <= 0:
            raise UnsupportedFeature(
                f"unscaled item mod (type {int(mod_type)}, allocation {stat_allocation}, "
                f"budget {budget})"
            )

        socket_penalty = 0.0
        raw_value = int(stat_allocation * budget * 0.0001 - socket_penalty + 0.5)

        cr_type = combat_rating_multiplier_type(item.inventory_type)
        if cr_type != CombatRatingMultiplierType.INVALID:
            if is_combat_rating(mod_type):
                multiplier = self.combat_rating_multiplier(item.item_level, cr_type)
            elif mod_type == ItemModType.STAMINA:
                multiplier = self.stamina_multiplier(item.item_level, cr_type)
            else:
                multiplier = 0.0
            if multiplier != 0:
                raw_value = int(raw_value * multiplier)

        return raw_value
