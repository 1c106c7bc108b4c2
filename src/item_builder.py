"""
SimcData - Item Builder
Turns an item reference (id + bonus ids + gem ids) into a fully scaled
SimcItem.

Build order:
  1. base fields and item level from the raw item
  2. raw stat mods
  3. bonus ids, in the order given, every table entry per id
  4. stat ratings for every mod at the final level and quality
  5. gems
  6. on-use/on-equip effects, each with its spell built in item context
"""

import logging
from typing import List, Optional

from config import GEM_SCALING_REFERENCE_LEVEL
from errors import UnsupportedFeature
from simc_enums import (
    InventoryType,
    ItemBonusType,
    ItemClass,
    ItemModType,
    ItemQuality,
    ItemSocketColor,
    PlayerScaling,
    enum_or_value,
)
from simc_models import ItemOptions, SimcItem, SimcItemEffect, SimcItemGem, SimcItemMod

logger = logging.getLogger(__name__)


class ItemBuilder:
    """Builds SimcItems from parsed profile items or ItemOptions."""

    def __init__(self, lookup, spell_builder,
                 gem_scaling_level: int = GEM_SCALING_REFERENCE_LEVEL):
        self.lookup = lookup
        self.spell_builder = spell_builder
        self.gem_scaling_level = gem_scaling_level

    def build(self, parsed_item) -> Optional[SimcItem]:
        """Build from a profile item line (profile_parser.ParsedItem).

        Returns None when the item id is unknown.

        Raises:
            UnsupportedFeature: the item uses a branch of the scaling rules
                that is not implemented (socket multipliers, unscaled mods,
                spell-backed gem enchantments).
        """
        item = self._create(parsed_item.item_id, parsed_item.bonus_ids,
                            parsed_item.gem_ids, drop_level=parsed_item.drop_level)
        if item is not None:
            item.equipped = parsed_item.equipped
        return item

    def build_from_options(self, options: ItemOptions) -> Optional[SimcItem]:
        """Build from explicit options; item_level/quality override when set."""
        return self._create(options.item_id, options.bonus_ids, options.gem_ids,
                            item_level=options.item_level, quality=options.quality,
                            drop_level=options.drop_level)

    # ── Steps ───────────────────────────────────────────────

    def _create(self, item_id: int, bonus_ids: List[int], gem_ids: List[int],
                item_level: int = 0, quality: int = -1,
                drop_level: int = 0) -> Optional[SimcItem]:
        raw = self.lookup.raw_item(item_id)
        if raw is None:
            logger.warning(f"ItemBuilder: unable to find item {item_id}")
            return None

        item = SimcItem(
            item_id=raw.id,
            name=raw.name,
            quality=enum_or_value(ItemQuality, raw.quality),
            inventory_type=enum_or_value(InventoryType, raw.inventory_type),
            item_class=enum_or_value(ItemClass, raw.item_class),
            item_subclass=raw.item_subclass,
            drop_level=drop_level,
            sockets=[enum_or_value(ItemSocketColor, c) for c in raw.socket_colours],
        )
        item.item_level += raw.item_level
        if quality >= 0:
            item.quality = enum_or_value(ItemQuality, quality)

        for mod in raw.item_mods:
            if mod.socket_multiplier > 0:
                raise UnsupportedFeature(
                    f"socket multiplier {mod.socket_multiplier} on item {raw.id}")
            self._add_mod(item, mod.mod_type, mod.stat_allocation)

        self.apply_bonuses(item, bonus_ids)
        if item_level > 0:
            item.item_level = item_level

        for mod in item.mods:
            mod.stat_rating = self.lookup.scaled_mod_value(item, mod.type, mod.raw_stat_allocation)

        self.add_gems(item, gem_ids)
        self.add_effects(item, raw.item_effects)
        return item

    def apply_bonuses(self, item: SimcItem, bonus_ids: List[int]):
        for bonus_id in bonus_ids:
            for entry in self.lookup.item_bonuses(bonus_id):
                if entry.type == ItemBonusType.ILEVEL:
                    logger.debug(f"ItemBuilder: [{item.item_id}] {item.name} ilvl "
                                 f"{item.item_level} + {entry.value1}")
                    item.item_level += entry.value1
                elif entry.type == ItemBonusType.MOD:
                    logger.debug(f"ItemBuilder: [{item.item_id}] {item.name} adding mod "
                                 f"{entry.value1} with allocation {entry.value2}")
                    self._add_mod(item, entry.value1, entry.value2)
                elif entry.type == ItemBonusType.QUALITY:
                    logger.debug(f"ItemBuilder: [{item.item_id}] {item.name} quality "
                                 f"{item.quality} -> {entry.value1}")
                    item.quality = enum_or_value(ItemQuality, entry.value1)
                elif entry.type == ItemBonusType.SOCKET:
                    self._color_sockets(item, entry.value1, entry.value2)
                elif entry.type == ItemBonusType.ADD_ITEM_EFFECT:
                    logger.warning(f"ItemBuilder: [{item.item_id}] adding item effect "
                                   f"{entry.value1} from bonus {bonus_id} is not supported")
                elif entry.type in (ItemBonusType.DESC, ItemBonusType.SUFFIX):
                    continue
                else:
                    logger.debug(f"ItemBuilder: [{item.item_id}] ignoring bonus {bonus_id} "
                                 f"type {entry.type}")

    def add_gems(self, item: SimcItem, gem_ids: List[int]):
        for gem_id in gem_ids:
            gem_item = self.lookup.raw_item(gem_id)
            if gem_item is None:
                continue
            gem_property = self.lookup.gem_property(gem_item.gem_properties)
            if gem_property is None:
                continue
            enchant = self.lookup.enchantment(gem_property.enchant_id)
            if enchant is None:
                continue
            if enchant.spell_id > 0:
                raise UnsupportedFeature(
                    f"gem {gem_id} enchantment {enchant.id} with spell {enchant.spell_id}")

            # Enchantment scaling ids are stored as class numbers
            scaling = enum_or_value(PlayerScaling, enchant.scaling_id)
            scaled = self.lookup.spell_scaling(self.lookup.class_id(scaling),
                                               self.gem_scaling_level)
            stat = enchant.sub_enchantments[0].property if enchant.sub_enchantments else 0
            item.gems.append(SimcItemGem(
                gem_id=gem_id,
                enchant_id=enchant.id,
                stat_type=enum_or_value(ItemModType, stat),
                stat_rating=int(scaled),
            ))

    def add_effects(self, item: SimcItem, raw_effects):
        for raw_effect in raw_effects:
            spell = self.spell_builder.build_item_spell(
                raw_effect.spell_id, item.item_level, item.quality, item.inventory_type)
            if spell is None:
                logger.warning(f"ItemBuilder: [{item.item_id}] effect {raw_effect.id} "
                               f"references missing spell {raw_effect.spell_id}")
                continue
            item.effects.append(SimcItemEffect(
                effect_id=raw_effect.id,
                type=raw_effect.type,
                cooldown_group=raw_effect.cooldown_group,
                cooldown_duration=raw_effect.cooldown_duration,
                cooldown_group_duration=raw_effect.cooldown_group_duration,
                spell=spell,
            ))

    # ── Helpers ─────────────────────────────────────────────

    @staticmethod
    def _add_mod(item: SimcItem, mod_type: int, allocation: int):
        item.mods.append(SimcItemMod(type=enum_or_value(ItemModType, mod_type),
                                     raw_stat_allocation=allocation))

    @staticmethod
    def _color_sockets(item: SimcItem, count: int, colour: int):
        """Recolour up to `count` uncoloured sockets; the list never grows."""
        colour = enum_or_value(ItemSocketColor, colour)
        added = 0
        for i, current in enumerate(item.sockets):
            if added >= count:
                break
            if current == ItemSocketColor.NONE:
                item.sockets[i] = colour
                added += 1
        if added < count:
            logger.error(f"ItemBuilder: [{item.item_id}] no uncoloured socket left for "
                         f"{count - added} of {count} {colour!r} socket(s)")
